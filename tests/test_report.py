"""Tests for report rendering."""

from __future__ import annotations

import json

import pytest
import yaml

from repolens import analyze
from repolens.report import render, to_json, to_markdown, to_yaml
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def android_analysis(repo_builder: RepoBuilder):
    repo_builder.write(
        {
            "app/build.gradle": """
                plugins { id 'com.android.application' }
                dependencies {
                    implementation 'androidx.core:core-ktx:1.12.0'
                }
            """,
            "app/src/main/java/com/demo/MainActivity.kt": "import org.koin.android.ext.android.inject\n",
        }
    )
    return analyze(repo_builder.path())


def test_json_and_yaml_carry_the_same_data(android_analysis) -> None:
    from_json = json.loads(to_json(android_analysis))
    from_yaml = yaml.safe_load(to_yaml(android_analysis))

    assert from_json == from_yaml == android_analysis.to_dict()
    assert from_json["platform"]["frameworks"] == ["gradle"]
    assert from_json["build_commands"]["test_compile"] == "./gradlew compileDebugUnitTestKotlin"


def test_markdown_summary_lists_key_facts(android_analysis) -> None:
    summary = to_markdown(android_analysis)

    assert summary.startswith("# 🤖 ANDROID project analysis")
    assert "### android / gradle (1)" in summary
    assert "`implementation 'androidx.core:core-ktx:1.12.0'`" in summary
    assert "**Dependency injection:** koin" in summary
    assert "3. Run tests: `./gradlew testDebugUnitTest`" in summary


def test_markdown_summary_without_dependencies(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"notes.txt": "hello\n"})

    summary = to_markdown(analyze(repo_builder.path()))

    assert "No dependency declarations found." in summary
    assert "2. Run tests: `make test`" in summary


def test_render_rejects_unknown_format(android_analysis) -> None:
    assert render(android_analysis, "JSON") == to_json(android_analysis)
    with pytest.raises(ValueError, match="Unsupported report format"):
        render(android_analysis, "xml")
