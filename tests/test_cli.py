"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from repolens.cli import _build_parser, main
from tests._fixtures.repo_builder import RepoBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "analyze"])
    assert args.verbose is True
    assert args.command == "analyze"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["analyze", "--verbose"])
    assert args.verbose is True


def test_cli_rejects_unknown_format() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["analyze", "--format", "xml"])


def test_cli_prints_json_report(repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    repo_builder.write({"Podfile": "pod 'Alamofire'\n"})

    main(["analyze", str(repo_builder.path())])

    payload = json.loads(capsys.readouterr().out)
    assert payload["platform"]["platform_type"] == "ios"
    assert payload["dependencies"]["ios"] == {"cocoapods": ["pod 'Alamofire'"]}


def test_cli_uses_repository_config_format(
    repo_builder: RepoBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_builder.write({"pom.xml": "<project/>\n", ".repolens.yml": "output:\n  format: yaml\n"})

    main(["analyze", str(repo_builder.path())])

    out = capsys.readouterr().out
    assert "platform_type: java" in out


def test_cli_writes_output_file(repo_builder: RepoBuilder, tmp_path: Path) -> None:
    repo_builder.write({"angular.json": "{}\n"})
    target = tmp_path / "report.md"

    main(["analyze", str(repo_builder.path()), "--format", "markdown", "--output", str(target)])

    assert "ANGULAR project analysis" in target.read_text(encoding="utf-8")


def test_cli_exits_on_missing_repository(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "Repository path not found" in capsys.readouterr().err


def test_cli_exits_on_invalid_config(repo_builder: RepoBuilder) -> None:
    repo_builder.write({".repolens.yml": "output:\n  format: xml\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(repo_builder.path())])

    assert excinfo.value.code == 1
