"""Ordered rule tables driving platform detection and structure analysis.

The analyzers only walk these tables; adding a marker, pattern or command
template is a data change here and never touches traversal or aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from ..models import (
    BuildCommands,
    DiFramework,
    Framework,
    Language,
    PlatformType,
    ReactiveFramework,
    TestFramework,
    UiFramework,
)
from ..repo_index import RepoIndex
from .utils import first_or_empty, read_text


@dataclass(frozen=True)
class FileMarker:
    """Fires when a file with exactly this name is indexed."""

    name: str

    def match(self, index: RepoIndex) -> Optional[str]:
        return self.name if index.has_file(self.name) else None


@dataclass(frozen=True)
class PathMarker:
    """Fires when any root-relative path contains the fragment."""

    fragment: str

    def match(self, index: RepoIndex) -> Optional[str]:
        return self.fragment if index.has_path_pattern(self.fragment) else None


@dataclass(frozen=True)
class ContentMarker:
    """Fires when one of the named files contains one of the needles."""

    filenames: Tuple[str, ...]
    needles: Tuple[str, ...]
    first_only: bool = False

    def match(self, index: RepoIndex) -> Optional[str]:
        for filename in self.filenames:
            paths = index.files_with_name(filename)
            if self.first_only:
                paths = first_or_empty(paths)
            for path in paths:
                content = read_text(path)
                if content is None:
                    continue
                for needle in self.needles:
                    if needle in content:
                        return f"{index.relative(path)} ({needle})"
        return None


@dataclass(frozen=True)
class PlatformRule:
    platform: PlatformType
    markers: Tuple[FileMarker | PathMarker | ContentMarker, ...]


_GRADLE_FILES = ("build.gradle", "build.gradle.kts")

# Priority order: the first rule with any firing marker decides the platform.
PLATFORM_RULES: Tuple[PlatformRule, ...] = (
    PlatformRule(
        PlatformType.IOS,
        (PathMarker(".xcodeproj"), PathMarker(".xcworkspace"), FileMarker("Podfile")),
    ),
    PlatformRule(
        PlatformType.ANDROID,
        (
            FileMarker("AndroidManifest.xml"),
            ContentMarker(
                _GRADLE_FILES,
                ("com.android.application", "com.android.library", "com.android.test"),
            ),
        ),
    ),
    PlatformRule(
        PlatformType.ANGULAR,
        (
            FileMarker("angular.json"),
            ContentMarker(("package.json",), ("@angular/core", "@angular/cli"), first_only=True),
        ),
    ),
    PlatformRule(
        PlatformType.JAVA,
        (FileMarker("pom.xml"), FileMarker("build.gradle"), FileMarker("build.gradle.kts")),
    ),
)

# (language, extensions); an empty extension tuple means "always present".
LANGUAGE_RULES: Dict[PlatformType, Tuple[Tuple[Language, Tuple[str, ...]], ...]] = {
    PlatformType.IOS: (
        (Language.SWIFT, ("swift",)),
        (Language.OBJECTIVE_C, ("m", "h")),
    ),
    PlatformType.ANDROID: (
        (Language.KOTLIN, ("kt",)),
        (Language.JAVA, ("java",)),
    ),
    PlatformType.JAVA: (
        (Language.KOTLIN, ("kt",)),
        (Language.JAVA, ("java",)),
    ),
    PlatformType.ANGULAR: (
        (Language.TYPESCRIPT, ()),
        (Language.JAVASCRIPT, ("js",)),
    ),
}

# (framework, marker filenames); an empty tuple means "always present".
FRAMEWORK_RULES: Dict[PlatformType, Tuple[Tuple[Framework, Tuple[str, ...]], ...]] = {
    PlatformType.IOS: (
        (Framework.COCOAPODS, ("Podfile",)),
        (Framework.SWIFT_PACKAGE_MANAGER, ("Package.swift",)),
    ),
    PlatformType.ANDROID: ((Framework.GRADLE, ()),),
    PlatformType.JAVA: (
        (Framework.MAVEN, ("pom.xml",)),
        (Framework.GRADLE, _GRADLE_FILES),
    ),
    PlatformType.ANGULAR: (
        (Framework.NPM, ("package.json",)),
        (Framework.YARN, ("yarn.lock",)),
    ),
}

# Ecosystems extracted for each platform family, in report order.
DEPENDENCY_ECOSYSTEMS: Dict[PlatformType, Tuple[str, ...]] = {
    PlatformType.JAVA: ("maven", "gradle"),
    PlatformType.ANDROID: ("gradle",),
    PlatformType.IOS: ("cocoapods",),
    PlatformType.ANGULAR: ("npm",),
}

SOURCE_EXTENSIONS: Dict[PlatformType, Tuple[str, ...]] = {
    PlatformType.JAVA: ("java", "kt"),
    PlatformType.ANDROID: ("java", "kt"),
    PlatformType.IOS: ("swift", "m", "h"),
    PlatformType.ANGULAR: ("ts", "js"),
}

DI_MARKERS: Tuple[Tuple[DiFramework, Tuple[str, ...]], ...] = (
    (DiFramework.KOIN, ("import Koin", "org.koin")),
    (DiFramework.HILT, ("import Hilt", "dagger.hilt")),
    (DiFramework.DAGGER, ("import Dagger", "dagger.")),
    (DiFramework.SPRING, ("@Inject", "@Autowired")),
)

REACTIVE_MARKERS: Tuple[Tuple[ReactiveFramework, Tuple[str, ...]], ...] = (
    (ReactiveFramework.RXSWIFT, ("import RxSwift", "import RxCocoa")),
    (ReactiveFramework.RXJAVA, ("import RxJava", "io.reactivex")),
    (ReactiveFramework.COMBINE, ("import Combine",)),
    (ReactiveFramework.COROUTINES, ("kotlinx.coroutines",)),
    (ReactiveFramework.RXJS, ("import { Observable }", "rxjs")),
)

# (ui framework, needles, platforms it applies to or None for all)
UI_MARKERS: Tuple[Tuple[UiFramework, Tuple[str, ...], Optional[FrozenSet[PlatformType]]], ...] = (
    (UiFramework.SWIFTUI, ("import SwiftUI",), None),
    (UiFramework.UIKIT, ("import UIKit",), None),
    (UiFramework.JETPACK_COMPOSE, ("androidx.compose",), None),
    (UiFramework.ANGULAR, ("@Component",), frozenset({PlatformType.ANGULAR})),
)

# (pattern, directory-name groups, platforms or None for all). Every group
# must be matched by at least one directory name (compared lower-cased).
ARCHITECTURE_DIR_MARKERS: Tuple[
    Tuple[str, Tuple[FrozenSet[str], ...], Optional[FrozenSet[PlatformType]]], ...
] = (
    ("mvvm", (frozenset({"viewmodel", "viewmodels"}),), None),
    ("mvp", (frozenset({"presenter", "presenters"}),), None),
    ("clean-architecture", (frozenset({"domain"}), frozenset({"data"})), None),
    ("coordinator", (frozenset({"coordinator", "coordinators"}),), frozenset({PlatformType.IOS})),
    ("redux", (frozenset({"store", "reducers"}),), frozenset({PlatformType.ANGULAR})),
)

TEST_DIR_NAMES: FrozenSet[str] = frozenset(
    {"test", "tests", "Test", "Tests", "androidTest", "unitTest"}
)

TEST_FILE_SUFFIXES: Dict[PlatformType, Tuple[str, ...]] = {
    PlatformType.JAVA: ("Test.java", "Test.kt", "Tests.java", "Tests.kt"),
    PlatformType.ANDROID: ("Test.java", "Test.kt", "Tests.java", "Tests.kt"),
    PlatformType.IOS: ("Test.swift", "Tests.swift", "Spec.swift"),
    PlatformType.ANGULAR: (".spec.ts", ".spec.js", "test.ts"),
}

_JVM_TEST_MARKERS: Tuple[Tuple[TestFramework, Tuple[str, ...]], ...] = (
    (TestFramework.JUNIT, ("import org.junit",)),
    (TestFramework.MOCKITO, ("import org.mockito",)),
    (TestFramework.MOCKK, ("import io.mockk",)),
)

TEST_FRAMEWORK_MARKERS: Dict[PlatformType, Tuple[Tuple[TestFramework, Tuple[str, ...]], ...]] = {
    PlatformType.JAVA: _JVM_TEST_MARKERS,
    PlatformType.ANDROID: _JVM_TEST_MARKERS,
    PlatformType.IOS: (
        (TestFramework.XCTEST, ("import XCTest",)),
        (TestFramework.QUICK, ("import Quick",)),
    ),
    PlatformType.ANGULAR: (
        (TestFramework.JASMINE, ("jasmine", "describe(")),
        (TestFramework.JEST, ("jest",)),
    ),
}

_JVM_MANIFEST_TEST_MARKERS: Tuple[Tuple[TestFramework, ContentMarker], ...] = (
    (TestFramework.JUNIT, ContentMarker(("pom.xml",) + _GRADLE_FILES, ("junit",))),
    (TestFramework.MOCKITO, ContentMarker(("pom.xml",) + _GRADLE_FILES, ("mockito",))),
    (TestFramework.MOCKK, ContentMarker(_GRADLE_FILES, ("io.mockk",))),
)

# Test frameworks declared in build manifests, independent of test sources.
TEST_MANIFEST_MARKERS: Dict[PlatformType, Tuple[Tuple[TestFramework, ContentMarker], ...]] = {
    PlatformType.JAVA: _JVM_MANIFEST_TEST_MARKERS,
    PlatformType.ANDROID: _JVM_MANIFEST_TEST_MARKERS,
    PlatformType.IOS: (
        (TestFramework.QUICK, ContentMarker(("Podfile",), ("pod 'Quick'", 'pod "Quick"'), True)),
    ),
    PlatformType.ANGULAR: (
        (TestFramework.JASMINE, ContentMarker(("package.json",), ('"jasmine-core"', '"karma-jasmine"'), True)),
        (TestFramework.JEST, ContentMarker(("package.json",), ('"jest"',), True)),
    ),
}

UI_TEST_PLATFORMS: FrozenSet[PlatformType] = frozenset({PlatformType.ANDROID, PlatformType.IOS})

SOURCE_DIR_PATTERNS: Dict[PlatformType, Tuple[str, ...]] = {
    PlatformType.JAVA: ("src/main/java", "src/main/kotlin", "src"),
    PlatformType.ANDROID: ("src/main/java", "src/main/kotlin", "src"),
    PlatformType.IOS: ("Sources", "src"),
    PlatformType.ANGULAR: ("src/app", "src"),
}

_JVM_RESOURCE_DIRS = ("src/main/resources", "res")

RESOURCE_DIR_PATTERNS: Dict[PlatformType, Tuple[str, ...]] = {
    PlatformType.JAVA: _JVM_RESOURCE_DIRS,
    PlatformType.ANDROID: _JVM_RESOURCE_DIRS,
    PlatformType.IOS: ("Resources", "Assets.xcassets"),
    PlatformType.ANGULAR: ("src/assets",),
}

_JVM_CONFIG_FILES = (
    "build.gradle",
    "build.gradle.kts",
    "pom.xml",
    "settings.gradle",
    "settings.gradle.kts",
)

CONFIG_FILENAMES: Dict[PlatformType, Tuple[str, ...]] = {
    PlatformType.JAVA: _JVM_CONFIG_FILES,
    PlatformType.ANDROID: _JVM_CONFIG_FILES,
    PlatformType.IOS: ("Package.swift", "Podfile", "project.pbxproj"),
    PlatformType.ANGULAR: ("angular.json", "package.json", "tsconfig.json"),
}


@dataclass(frozen=True)
class BuildRule:
    """Command template selected when ``requires`` (if any) is indexed."""

    platform: PlatformType
    requires: Optional[str]
    commands: BuildCommands


_XCODE_WORKSPACE = "xcodebuild -workspace <workspace> -scheme <scheme>"

BUILD_RULES: Tuple[BuildRule, ...] = (
    BuildRule(
        PlatformType.JAVA,
        "pom.xml",
        BuildCommands(main_build="mvn compile", test_compile="mvn test-compile", test_run="mvn test"),
    ),
    BuildRule(
        PlatformType.JAVA,
        None,
        BuildCommands(
            main_build="./gradlew build",
            test_compile="./gradlew testClasses",
            test_run="./gradlew test",
        ),
    ),
    BuildRule(
        PlatformType.ANDROID,
        None,
        BuildCommands(
            main_build="./gradlew assembleDebug",
            test_compile="./gradlew compileDebugUnitTestKotlin",
            test_run="./gradlew testDebugUnitTest",
        ),
    ),
    BuildRule(
        PlatformType.IOS,
        "Podfile",
        BuildCommands(
            main_build=f"pod install && {_XCODE_WORKSPACE} build",
            test_compile=f"{_XCODE_WORKSPACE} build-for-testing",
            test_run=f"{_XCODE_WORKSPACE} test",
        ),
    ),
    BuildRule(
        PlatformType.IOS,
        None,
        BuildCommands(
            main_build="xcodebuild -scheme <scheme> build",
            test_compile="xcodebuild -scheme <scheme> build-for-testing",
            test_run="xcodebuild test -scheme <scheme>",
        ),
    ),
    BuildRule(
        PlatformType.ANGULAR,
        "yarn.lock",
        BuildCommands(main_build="yarn build", test_run="yarn test"),
    ),
    BuildRule(
        PlatformType.ANGULAR,
        None,
        BuildCommands(main_build="npm run build", test_run="npm test"),
    ),
)

FALLBACK_BUILD_COMMANDS = BuildCommands(main_build="make", test_run="make test")
