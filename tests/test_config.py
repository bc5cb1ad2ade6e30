"""Tests for repolens.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from repolens.config import ConfigError, RepoLensConfig, SamplingConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, RepoLensConfig)
    assert config.sampling == SamplingConfig(source_files=50, test_files=20)
    assert config.output.format == "json"
    assert config.source is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".repolens.yml"
    config_file.write_text(
        """
sampling:
  source_files: 10
  test_files: 5
output:
  format: YAML
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.sampling.source_files == 10
    assert config.sampling.test_files == 5
    assert config.output.format == "yaml"
    assert config.source == config_file.resolve()


def test_load_config_accepts_explicit_file(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("output:\n  format: markdown\n", encoding="utf-8")

    config = load_config(config_file)

    assert config.output.format == "markdown"
    assert config.sampling == SamplingConfig()


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".repolens.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).sampling == SamplingConfig()


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "sampling: 3\n",
        "sampling:\n  source_files: 0\n",
        "sampling:\n  test_files: true\n",
        "output:\n  format: xml\n",
        "sampling: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / ".repolens.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
