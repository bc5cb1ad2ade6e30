"""Dependency declaration extraction per build ecosystem."""

from __future__ import annotations

import json
from typing import Dict, List, Mapping, Optional, Tuple

from ..logging import get_logger
from ..models import DependencyInfo, PlatformType
from ..repo_index import RepoIndex
from .base import ManifestExtractor
from .rules import DEPENDENCY_ECOSYSTEMS
from .utils import first_or_empty, iter_stripped_lines, load_json

_logger = get_logger("dependencies")


class MavenExtractor(ManifestExtractor):
    """Reads ``<artifactId>`` lines from the first pom.xml only."""

    ecosystem = "maven"

    def extract(self, index: RepoIndex) -> Optional[List[str]]:
        paths = first_or_empty(index.files_with_name("pom.xml"))
        deps = [line for line in iter_stripped_lines(paths) if line.startswith("<artifactId>")]
        return deps or None


class GradleExtractor(ManifestExtractor):
    """Aggregates dependency lines across every Gradle build script.

    Multi-module builds spread declarations over many files, so unlike the
    other ecosystems every matching file is read: all ``build.gradle``
    scripts in index order, then all ``build.gradle.kts`` scripts.
    """

    ecosystem = "gradle"
    FILENAMES = ("build.gradle", "build.gradle.kts")
    KEYWORDS = ("implementation", "api", "testImplementation")

    def extract(self, index: RepoIndex) -> Optional[List[str]]:
        paths = [path for name in self.FILENAMES for path in index.files_with_name(name)]
        deps = [
            line
            for line in iter_stripped_lines(paths)
            if any(keyword in line for keyword in self.KEYWORDS)
        ]
        return deps or None


class CocoaPodsExtractor(ManifestExtractor):
    ecosystem = "cocoapods"

    def extract(self, index: RepoIndex) -> Optional[List[str]]:
        paths = first_or_empty(index.files_with_name("Podfile"))
        pods = [line for line in iter_stripped_lines(paths) if line.startswith("pod ")]
        return pods or None


class NpmExtractor(ManifestExtractor):
    """Parses the first package.json and formats ``dependencies`` entries."""

    ecosystem = "npm"

    def extract(self, index: RepoIndex) -> Optional[List[str]]:
        paths = first_or_empty(index.files_with_name("package.json"))
        if not paths:
            return None
        data = load_json(paths[0])
        if not isinstance(data, dict):
            return None

        dependencies = data.get("dependencies")
        if not isinstance(dependencies, dict):
            return None
        # versions are rendered as compact JSON values, so "^1.0.0" keeps its quotes
        deps = [
            f"{name}: {_compact_json(version)}"
            for name, version in dependencies.items()
        ]
        return deps or None


def _compact_json(value: object) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


_DEFAULT_EXTRACTORS: Tuple[ManifestExtractor, ...] = (
    MavenExtractor(),
    GradleExtractor(),
    CocoaPodsExtractor(),
    NpmExtractor(),
)

_FAMILY_BY_PLATFORM = {
    PlatformType.JAVA: "java",
    PlatformType.IOS: "ios",
    PlatformType.ANDROID: "android",
    PlatformType.ANGULAR: "angular",
}


class DependencyAnalyzer:
    """Extracts raw dependency declarations for the detected platform."""

    def __init__(
        self,
        index: RepoIndex,
        extractors: Optional[Mapping[str, ManifestExtractor]] = None,
    ) -> None:
        self._index = index
        if extractors is None:
            extractors = {extractor.ecosystem: extractor for extractor in _DEFAULT_EXTRACTORS}
        self._extractors = dict(extractors)

    def analyze(self, platform: PlatformType) -> DependencyInfo:
        family = _FAMILY_BY_PLATFORM.get(platform)
        if family is None:
            return DependencyInfo()

        groups: Dict[str, List[str]] = {}
        for ecosystem in DEPENDENCY_ECOSYSTEMS.get(platform, ()):
            extractor = self._extractors.get(ecosystem)
            if extractor is None:
                continue
            entries = extractor.extract(self._index)
            if entries:
                groups[ecosystem] = entries
            _logger.debug("%s: %d %s entries", platform.value, len(entries or ()), ecosystem)

        return DependencyInfo(**{family: groups})


__all__ = [
    "CocoaPodsExtractor",
    "DependencyAnalyzer",
    "GradleExtractor",
    "MavenExtractor",
    "NpmExtractor",
]
