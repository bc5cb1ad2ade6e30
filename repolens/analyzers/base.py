"""Base classes for dependency manifest extractors."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..repo_index import RepoIndex


class ManifestExtractor(ABC):
    """Contract for extractors that read one build ecosystem's manifests."""

    #: Ecosystem key used in the dependency report (e.g. ``"maven"``).
    ecosystem: str

    @abstractmethod
    def extract(self, index: RepoIndex) -> Optional[List[str]]:
        """Return raw declaration strings, or None when nothing was found."""
