"""CLI entrypoints for repolens commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, OUTPUT_FORMATS, ConfigError, load_config
from .logging import configure_logging
from .orchestrator import ProjectAnalyzer
from .report import render
from .repo_index import TraversalError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repolens",
        description="Classify a repository's platform and summarise its dependencies and layout.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyse a repository and print the report.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Report format (defaults to output.format from the config, else json).",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    analyze_parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a .repolens.yml file or the directory holding it.",
    )
    analyze_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repolens commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "analyze":
        try:
            config_path = args.config if args.config is not None else Path(args.path) / CONFIG_FILENAME
            config = load_config(config_path)
        except ConfigError as exc:
            parser.exit(1, f"repolens: invalid configuration: {exc}\n")

        try:
            analysis = ProjectAnalyzer(args.path, config).analyze()
        except TraversalError as exc:
            parser.exit(1, f"repolens analyze failed: {exc}\n")

        output = render(analysis, args.format or config.output.format)
        if args.output is None:
            sys.stdout.write(output)
        else:
            args.output.write_text(output, encoding="utf-8")
            print(f"Report written to {_relativize(args.output)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
