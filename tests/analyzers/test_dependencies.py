"""Tests for dependency extraction."""

from __future__ import annotations

from repolens.analyzers.dependencies import DependencyAnalyzer
from repolens.models import DependencyInfo, PlatformType
from tests._fixtures.repo_builder import RepoBuilder

POM = """
    <project>
      <groupId>demo</groupId>
      <artifactId>demo-app</artifactId>
      <dependencies>
        <dependency>
          <groupId>org.springframework.boot</groupId>
          <artifactId>spring-boot-starter-web</artifactId>
        </dependency>
        <dependency>
          <groupId>junit</groupId>
            <artifactId>junit</artifactId>
        </dependency>
      </dependencies>
    </project>
"""


def test_maven_captures_artifact_lines_in_document_order(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"pom.xml": POM})

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.JAVA)

    assert deps.java["maven"] == (
        "<artifactId>demo-app</artifactId>",
        "<artifactId>spring-boot-starter-web</artifactId>",
        "<artifactId>junit</artifactId>",
    )
    assert "gradle" not in deps.java


def test_maven_reads_only_the_first_pom(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "pom.xml": "<artifactId>root</artifactId>\n",
            "module/pom.xml": "<artifactId>module</artifactId>\n",
        }
    )

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.JAVA)

    assert deps.java["maven"] == ("<artifactId>root</artifactId>",)


def test_maven_without_artifacts_is_absent(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"pom.xml": "<project/>\n"})

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.JAVA)

    assert "maven" not in deps.java


def test_gradle_concatenates_groovy_and_kotlin_scripts(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "build.gradle": """
                dependencies {
                    implementation 'com.squareup.retrofit2:retrofit:2.9.0'
                }
            """,
            "app/build.gradle.kts": """
                dependencies {
                    testImplementation("junit:junit:4.13.2")
                    api(project(":core"))
                }
            """,
        }
    )

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.JAVA)

    assert deps.java["gradle"] == (
        "implementation 'com.squareup.retrofit2:retrofit:2.9.0'",
        'testImplementation("junit:junit:4.13.2")',
        'api(project(":core"))',
    )


def test_gradle_reads_groovy_scripts_before_kotlin_scripts(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "build.gradle.kts": "implementation(\"root:kts:1\")\n",
            "app/build.gradle": "implementation 'app:groovy:1'\n",
        }
    )

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.JAVA)

    assert deps.java["gradle"] == (
        "implementation 'app:groovy:1'",
        'implementation("root:kts:1")',
    )


def test_gradle_lines_split_on_newlines_only(repo_builder: RepoBuilder) -> None:
    (repo_builder.path() / "build.gradle").write_text(
        "implementation 'a:b:1' \u2028 api 'c:d:2'\r\n", encoding="utf-8", newline=""
    )

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.JAVA)

    assert deps.java["gradle"] == ("implementation 'a:b:1' \u2028 api 'c:d:2'",)


def test_android_dependencies_use_gradle_only(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "app/build.gradle": "implementation 'androidx.core:core-ktx:1.12.0'\n",
            "pom.xml": "<artifactId>ignored</artifactId>\n",
        }
    )

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.ANDROID)

    assert dict(deps.android) == {"gradle": ("implementation 'androidx.core:core-ktx:1.12.0'",)}
    assert deps.java == {}


def test_cocoapods_captures_pod_lines(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "Podfile": """
                platform :ios, '15.0'
                target 'App' do
                  pod 'Alamofire', '~> 5.8'
                  pod 'SnapKit'
                  # pod 'Disabled'
                end
            """,
        }
    )

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.IOS)

    assert deps.ios["cocoapods"] == ("pod 'Alamofire', '~> 5.8'", "pod 'SnapKit'")


def test_npm_formats_dependencies_in_document_order(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": """
                {
                  "name": "web",
                  "dependencies": {
                    "zone.js": "~0.14.0",
                    "@angular/core": "^17.0.0",
                    "rxjs": "~7.8.0"
                  },
                  "devDependencies": {"karma": "~6.4.0"}
                }
            """,
        }
    )

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.ANGULAR)

    assert deps.angular["npm"] == (
        'zone.js: "~0.14.0"',
        '@angular/core: "^17.0.0"',
        'rxjs: "~7.8.0"',
    )


def test_npm_renders_non_string_versions_as_compact_json(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {"package.json": '{"dependencies": {"a": {"version": "1", "x": [1, 2]}, "b": 3}}\n'}
    )

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.ANGULAR)

    assert deps.angular["npm"] == ('a: {"version":"1","x":[1,2]}', "b: 3")


def test_npm_with_empty_dependencies_is_absent(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"package.json": '{"dependencies": {}}\n'})

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.ANGULAR)

    assert "npm" not in deps.angular
    assert deps.is_empty()


def test_npm_invalid_json_degrades_to_absent(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"package.json": "{not json"})

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.ANGULAR)

    assert deps == DependencyInfo()


def test_unreadable_manifest_does_not_abort(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"build.gradle": "implementation 'a:b:1'\n"})
    (repo_builder.path() / "pom.xml").write_bytes(b"\xff\xfe<artifactId>\x00")

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.JAVA)

    assert "maven" not in deps.java
    assert deps.java["gradle"] == ("implementation 'a:b:1'",)


def test_unknown_platform_yields_no_dependencies(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"pom.xml": "<artifactId>x</artifactId>\n"})

    deps = DependencyAnalyzer(repo_builder.index()).analyze(PlatformType.UNKNOWN)

    assert deps.is_empty()
    assert deps.to_dict() == {"java": {}, "ios": {}, "android": {}, "angular": {}}
