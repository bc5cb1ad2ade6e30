"""Serialisation of ProjectAnalysis reports for downstream consumers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .models import ProjectAnalysis

_TEMPLATES_DIR = Path(__file__).with_name("templates")
_SUMMARY_TEMPLATE = "summary.md.j2"


def to_json(analysis: ProjectAnalysis) -> str:
    """Render the report as indented JSON with a stable key order."""
    return json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False) + "\n"


def to_yaml(analysis: ProjectAnalysis) -> str:
    return yaml.safe_dump(
        analysis.to_dict(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def to_markdown(analysis: ProjectAnalysis, templates_dir: Path | None = None) -> str:
    """Render a human-readable summary using the bundled Jinja2 template."""
    env = _create_env(templates_dir or _TEMPLATES_DIR)
    template = env.get_template(_SUMMARY_TEMPLATE)
    return template.render(
        analysis=analysis.to_dict(),
        platform_emoji=analysis.platform.platform_type.emoji,
        platform_name=analysis.platform.platform_type.value.upper(),
    )


_RENDERERS: Dict[str, Callable[[ProjectAnalysis], str]] = {
    "json": to_json,
    "yaml": to_yaml,
    "markdown": to_markdown,
}


def render(analysis: ProjectAnalysis, fmt: str = "json") -> str:
    """Render ``analysis`` in one of the supported formats."""
    try:
        renderer = _RENDERERS[fmt.lower()]
    except KeyError:
        supported = ", ".join(sorted(_RENDERERS))
        raise ValueError(f"Unsupported report format '{fmt}' (expected one of: {supported})") from None
    return renderer(analysis)


def _create_env(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


__all__ = ["render", "to_json", "to_markdown", "to_yaml"]
