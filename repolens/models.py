"""Core data models shared across repolens components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class _Tag(str, Enum):
    """Closed tag whose value is the serialized name."""

    def __str__(self) -> str:
        return self.value


class PlatformType(_Tag):
    """Platform a repository targets. Exactly one per analysis run."""

    IOS = "ios"
    ANDROID = "android"
    ANGULAR = "angular"
    JAVA = "java"
    UNKNOWN = "unknown"

    @property
    def emoji(self) -> str:
        return _PLATFORM_EMOJI[self]


_PLATFORM_EMOJI = {
    PlatformType.IOS: "📱",
    PlatformType.ANDROID: "🤖",
    PlatformType.ANGULAR: "🌐",
    PlatformType.JAVA: "☕",
    PlatformType.UNKNOWN: "💻",
}


class Language(_Tag):
    SWIFT = "swift"
    OBJECTIVE_C = "objective-c"
    KOTLIN = "kotlin"
    JAVA = "java"
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"


class Framework(_Tag):
    """Build tool or package manager detected for the platform."""

    COCOAPODS = "cocoapods"
    SWIFT_PACKAGE_MANAGER = "swift-package-manager"
    GRADLE = "gradle"
    MAVEN = "maven"
    NPM = "npm"
    YARN = "yarn"


class TestFramework(_Tag):
    __test__ = False

    JUNIT = "junit"
    MOCKITO = "mockito"
    MOCKK = "mockk"
    XCTEST = "xctest"
    QUICK = "quick"
    JASMINE = "jasmine"
    JEST = "jest"


class DiFramework(_Tag):
    KOIN = "koin"
    HILT = "hilt"
    DAGGER = "dagger"
    SPRING = "spring"


class ReactiveFramework(_Tag):
    RXSWIFT = "rxswift"
    RXJAVA = "rxjava"
    COMBINE = "combine"
    COROUTINES = "coroutines"
    RXJS = "rxjs"


class UiFramework(_Tag):
    SWIFTUI = "swiftui"
    UIKIT = "uikit"
    JETPACK_COMPOSE = "jetpack-compose"
    ANGULAR = "angular"


def _freeze_groups(groups: Mapping[str, Any]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({key: tuple(values) for key, values in groups.items()})


@dataclass(frozen=True)
class PlatformInfo:
    """Detected platform together with the markers that justified it."""

    platform_type: PlatformType
    languages: Tuple[Language, ...] = ()
    frameworks: Tuple[Framework, ...] = ()
    evidence: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform_type": self.platform_type.value,
            "languages": [language.value for language in self.languages],
            "frameworks": [framework.value for framework in self.frameworks],
            "evidence": list(self.evidence),
        }


@dataclass(frozen=True)
class DependencyInfo:
    """Raw dependency declarations grouped by platform family and ecosystem.

    A missing ecosystem key means the manifest was absent, unreadable, or
    yielded no entries.
    """

    java: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    ios: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    android: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    angular: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("java", "ios", "android", "angular"):
            object.__setattr__(self, name, _freeze_groups(getattr(self, name)))

    def is_empty(self) -> bool:
        return not (self.java or self.ios or self.android or self.angular)

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: {ecosystem: list(entries) for ecosystem, entries in getattr(self, name).items()}
            for name in ("java", "ios", "android", "angular")
        }


@dataclass(frozen=True)
class ArchitecturePatterns:
    dependency_injection: Tuple[DiFramework, ...] = ()
    reactive: Tuple[ReactiveFramework, ...] = ()
    ui_framework: Tuple[UiFramework, ...] = ()
    architecture: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dependency_injection": [item.value for item in self.dependency_injection],
            "reactive": [item.value for item in self.reactive],
            "ui_framework": [item.value for item in self.ui_framework],
            "architecture": list(self.architecture),
        }


@dataclass(frozen=True)
class TestStructure:
    __test__ = False

    test_directories: Tuple[str, ...] = ()
    test_frameworks: Tuple[TestFramework, ...] = ()
    test_patterns: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "test_directories": list(self.test_directories),
            "test_frameworks": [item.value for item in self.test_frameworks],
            "test_patterns": list(self.test_patterns),
        }


@dataclass(frozen=True)
class ProjectStructure:
    source_directories: Tuple[str, ...] = ()
    resource_directories: Tuple[str, ...] = ()
    config_files: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_directories": list(self.source_directories),
            "resource_directories": list(self.resource_directories),
            "config_files": list(self.config_files),
        }


@dataclass(frozen=True)
class BuildCommands:
    """Command templates used to build and test the project."""

    main_build: str
    test_run: str
    test_compile: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "main_build": self.main_build,
            "test_compile": self.test_compile,
            "test_run": self.test_run,
        }


@dataclass(frozen=True)
class ProjectAnalysis:
    """Complete, immutable result of analysing one repository."""

    root: str
    platform: PlatformInfo
    dependencies: DependencyInfo
    architecture_patterns: ArchitecturePatterns
    test_structure: TestStructure
    project_structure: ProjectStructure
    build_commands: BuildCommands

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain, serialisable representation of the report."""
        return {
            "root": self.root,
            "platform": self.platform.to_dict(),
            "dependencies": self.dependencies.to_dict(),
            "architecture_patterns": self.architecture_patterns.to_dict(),
            "test_structure": self.test_structure.to_dict(),
            "project_structure": self.project_structure.to_dict(),
            "build_commands": self.build_commands.to_dict(),
        }
