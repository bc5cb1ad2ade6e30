"""Analyzer that infers architecture, test layout and build commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Set, Tuple

from ..config import SamplingConfig
from ..logging import get_logger
from ..models import (
    ArchitecturePatterns,
    BuildCommands,
    DiFramework,
    PlatformType,
    ProjectStructure,
    ReactiveFramework,
    TestFramework,
    TestStructure,
    UiFramework,
)
from ..repo_index import RepoIndex
from .rules import (
    ARCHITECTURE_DIR_MARKERS,
    BUILD_RULES,
    CONFIG_FILENAMES,
    DI_MARKERS,
    FALLBACK_BUILD_COMMANDS,
    REACTIVE_MARKERS,
    RESOURCE_DIR_PATTERNS,
    SOURCE_DIR_PATTERNS,
    SOURCE_EXTENSIONS,
    TEST_DIR_NAMES,
    TEST_FILE_SUFFIXES,
    TEST_FRAMEWORK_MARKERS,
    TEST_MANIFEST_MARKERS,
    UI_MARKERS,
    UI_TEST_PLATFORMS,
)
from .utils import add_unique, read_text

_logger = get_logger("structure")


class StructureAnalyzer:
    """Derives structural metadata from the shared index and platform."""

    def __init__(self, index: RepoIndex, sampling: SamplingConfig | None = None) -> None:
        self._index = index
        self._sampling = sampling or SamplingConfig()

    # Architecture

    def analyze_architecture(self, platform: PlatformType) -> ArchitecturePatterns:
        di: List[DiFramework] = []
        reactive: List[ReactiveFramework] = []
        ui: List[UiFramework] = []

        sources = self._index.files_with_extensions(SOURCE_EXTENSIONS.get(platform, ()))
        _logger.debug(
            "Sampling %d of %d source files for architecture markers",
            min(len(sources), self._sampling.source_files),
            len(sources),
        )
        for path in sources[: self._sampling.source_files]:
            content = read_text(path)
            if content is None:
                continue
            for framework, needles in DI_MARKERS:
                if _contains_any(content, needles):
                    add_unique(di, framework)
            for framework, needles in REACTIVE_MARKERS:
                if _contains_any(content, needles):
                    add_unique(reactive, framework)
            for framework, needles, platforms in UI_MARKERS:
                if platforms is not None and platform not in platforms:
                    continue
                if _contains_any(content, needles):
                    add_unique(ui, framework)

        return ArchitecturePatterns(
            dependency_injection=tuple(di),
            reactive=tuple(reactive),
            ui_framework=tuple(ui),
            architecture=self._detect_layout_patterns(platform),
        )

    def _detect_layout_patterns(self, platform: PlatformType) -> Tuple[str, ...]:
        if platform is PlatformType.UNKNOWN:
            return ()
        dir_names = self._directory_names()
        patterns: List[str] = []
        for name, groups, platforms in ARCHITECTURE_DIR_MARKERS:
            if platforms is not None and platform not in platforms:
                continue
            if all(group & dir_names for group in groups):
                patterns.append(name)
        return tuple(patterns)

    def _directory_names(self) -> Set[str]:
        names: Set[str] = set()
        for path in self._index.files:
            for part in self._index.relative(path).split("/")[:-1]:
                names.add(part.lower())
        return names

    # Tests

    def analyze_test_structure(self, platform: PlatformType) -> TestStructure:
        patterns = ["unit-tests"]
        if platform in UI_TEST_PLATFORMS:
            patterns.append("ui-tests")

        return TestStructure(
            test_directories=self._find_test_directories(),
            test_frameworks=self._detect_test_frameworks(platform),
            test_patterns=tuple(patterns),
        )

    def _find_test_directories(self) -> Tuple[str, ...]:
        test_dirs: Set[str] = set()
        for path in self._index.files:
            parts = self._index.relative(path).split("/")[:-1]
            for position, part in enumerate(parts):
                # outermost test directory only, e.g. app/src/test for app/src/test/java/...
                if part in TEST_DIR_NAMES:
                    test_dirs.add("/".join(parts[: position + 1]))
                    break
        return tuple(sorted(test_dirs))

    def _detect_test_frameworks(self, platform: PlatformType) -> Tuple[TestFramework, ...]:
        found: Set[TestFramework] = set()

        markers = TEST_FRAMEWORK_MARKERS.get(platform, ())
        for path in self._find_test_files(platform)[: self._sampling.test_files]:
            content = read_text(path)
            if content is None:
                continue
            for framework, needles in markers:
                if _contains_any(content, needles):
                    found.add(framework)

        for framework, marker in TEST_MANIFEST_MARKERS.get(platform, ()):
            if framework not in found and marker.match(self._index) is not None:
                found.add(framework)

        # report in rule-table order so output is stable
        ordered: List[TestFramework] = [framework for framework, _ in markers if framework in found]
        ordered.extend(
            framework for framework in TestFramework if framework in found and framework not in ordered
        )
        return tuple(ordered)

    def _find_test_files(self, platform: PlatformType) -> List[Path]:
        suffixes = TEST_FILE_SUFFIXES.get(platform, ())
        if not suffixes:
            return []
        return [path for path in self._index.files if path.name.endswith(suffixes)]

    # Layout

    def analyze_project_structure(self, platform: PlatformType) -> ProjectStructure:
        config_files: List[str] = []
        for name in CONFIG_FILENAMES.get(platform, ()):
            config_files.extend(self._index.relative(path) for path in self._index.files_with_name(name))

        return ProjectStructure(
            source_directories=self._find_matching_dirs(SOURCE_DIR_PATTERNS.get(platform, ())),
            resource_directories=self._find_matching_dirs(RESOURCE_DIR_PATTERNS.get(platform, ())),
            config_files=tuple(config_files),
        )

    def _find_matching_dirs(self, patterns: Sequence[str]) -> Tuple[str, ...]:
        """Return directories ending at the first pattern found in each file's path."""
        if not patterns:
            return ()
        result: Set[str] = set()
        for path in self._index.files:
            parent = self._index.relative(path.parent) if path.parent != self._index.root else ""
            wrapped = f"/{parent}/"
            for pattern in patterns:
                position = wrapped.find(f"/{pattern}/")
                if position != -1:
                    result.add(wrapped[1 : position + len(pattern) + 1])
                    break
        return tuple(sorted(result))

    # Build

    def determine_build_commands(self, platform: PlatformType) -> BuildCommands:
        for rule in BUILD_RULES:
            if rule.platform is not platform:
                continue
            if rule.requires is None or self._index.has_file(rule.requires):
                return rule.commands
        return FALLBACK_BUILD_COMMANDS


def _contains_any(content: str, needles: Sequence[str]) -> bool:
    return any(needle in content for needle in needles)


__all__ = ["StructureAnalyzer"]
