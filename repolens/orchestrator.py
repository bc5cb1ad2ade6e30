"""Pipeline orchestration for a single repository analysis."""

from __future__ import annotations

import os
from pathlib import Path

from .analyzers import DependencyAnalyzer, PlatformDetector, StructureAnalyzer
from .config import RepoLensConfig
from .logging import get_logger
from .models import ProjectAnalysis
from .repo_index import RepoIndex


class ProjectAnalyzer:
    """Coordinates index construction and the analyzers for one repository.

    Each call to :meth:`analyze` walks the tree exactly once; the index is
    handed to every analyzer read-only and dropped when the call returns.
    Instances share no state, so separate repositories can be analysed
    concurrently with one instance each.
    """

    def __init__(
        self,
        repo_path: str | os.PathLike[str],
        config: RepoLensConfig | None = None,
    ) -> None:
        self.repo_path = Path(repo_path)
        self.config = config or RepoLensConfig()
        self.logger = get_logger("orchestrator")

    def analyze(self) -> ProjectAnalysis:
        """Return the complete analysis of the repository's current state."""
        self.logger.info("Analysing %s", self.repo_path)
        index = RepoIndex.build(self.repo_path)
        self.logger.debug("Index holds %d files", len(index.files))

        platform = PlatformDetector(index).detect()
        platform_type = platform.platform_type

        dependencies = DependencyAnalyzer(index).analyze(platform_type)

        structure = StructureAnalyzer(index, self.config.sampling)
        analysis = ProjectAnalysis(
            root=str(index.root),
            platform=platform,
            dependencies=dependencies,
            architecture_patterns=structure.analyze_architecture(platform_type),
            test_structure=structure.analyze_test_structure(platform_type),
            project_structure=structure.analyze_project_structure(platform_type),
            build_commands=structure.determine_build_commands(platform_type),
        )

        self.logger.info(
            "%s Detected platform %s",
            platform_type.emoji,
            platform_type.value.upper(),
        )
        if platform.languages:
            self.logger.info(
                "Languages: %s", ", ".join(language.value for language in platform.languages)
            )
        if analysis.architecture_patterns.dependency_injection:
            self.logger.info(
                "Dependency injection: %s",
                ", ".join(item.value for item in analysis.architecture_patterns.dependency_injection),
            )
        if analysis.test_structure.test_frameworks:
            self.logger.info(
                "Test frameworks: %s",
                ", ".join(item.value for item in analysis.test_structure.test_frameworks),
            )
        return analysis


def analyze(repo_path: str | os.PathLike[str], config: RepoLensConfig | None = None) -> ProjectAnalysis:
    """Analyse ``repo_path`` with a fresh :class:`ProjectAnalyzer`."""
    return ProjectAnalyzer(repo_path, config).analyze()


__all__ = ["ProjectAnalyzer", "analyze"]
