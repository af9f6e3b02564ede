"""Command-line interface for dircycle."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from analysis.run import analyze_directories
from config.loader import ConfigError, DircycleConfig, load_config
from report.dot import render_dot_graph
from report.json_report import render_json_report
from report.text import render_text_report
from verify.verify import verify_report

_PACKAGE_LOGGERS = ("analysis", "config", "graph", "parse", "report", "scan", "verify")


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "directories",
        nargs="+",
        help="Source directories to analyze",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Glob pattern (relative to each directory) to skip; repeatable",
    )
    parser.add_argument(
        "--config-root",
        default=".",
        help="Directory containing dircycle.toml (default: .)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed analysis information",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dircycle",
        description=(
            "Analyze module imports to find cyclic dependencies between "
            "directory prefixes"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze directories and report cycles"
    )
    _add_common_args(analyze_parser)
    analyze_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write report to file instead of stdout",
    )
    analyze_parser.add_argument(
        "--dot",
        default=None,
        metavar="FILE",
        help="Generate DOT graph file for visualization",
    )
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify a stored JSON report against a fresh analysis"
    )
    _add_common_args(verify_parser)
    verify_parser.add_argument(
        "--report",
        required=True,
        help="JSON report produced by 'analyze --json --output'",
    )

    return parser


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if verbose:
        for name in _PACKAGE_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG)


def _resolve_paths(values: list[str]) -> list[Path]:
    return [Path(value).expanduser().resolve() for value in values]


def _load_run_config(config_root: str, exclude: list[str]) -> DircycleConfig:
    config = load_config(Path(config_root).expanduser().resolve())
    return config.with_excludes(exclude)


def _handle_analyze(args: argparse.Namespace) -> int:
    config = _load_run_config(args.config_root, args.exclude)
    directories = _resolve_paths(args.directories)

    if args.verbose:
        sys.stdout.write(
            f"Analyzing directories: {', '.join(str(d) for d in directories)}\n"
        )

    result = analyze_directories(directories, config=config)

    if args.json:
        payload = render_json_report(result)
        label = "JSON report"
    else:
        payload = (render_text_report(result) + "\n").encode("utf-8")
        label = "Report"

    if args.output:
        Path(args.output).write_bytes(payload)
        sys.stdout.write(f"{label} written to {args.output}\n")
    else:
        sys.stdout.write(payload.decode("utf-8"))

    if args.dot:
        dot_graph = render_dot_graph(result.graph, result.feedback_arcs)
        Path(args.dot).write_text(dot_graph + "\n", encoding="utf-8")
        sys.stdout.write(f"DOT graph written to {args.dot}\n")
        sys.stdout.write(
            "Generate visualization with: dot -Tpng output.dot -o graph.png\n"
        )

    return 1 if result.has_violations else 0


def _handle_verify(args: argparse.Namespace) -> int:
    config = _load_run_config(args.config_root, args.exclude)
    report_path = Path(args.report).expanduser().resolve()
    try:
        result = verify_report(
            _resolve_paths(args.directories),
            report_path=report_path,
            config=config,
        )
    except (FileNotFoundError, IsADirectoryError) as exc:
        sys.stderr.write(f"report: {report_path}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        sys.stderr.write(f"mismatch: {result.report_path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(verbose=args.verbose)

    try:
        if args.command == "analyze":
            return _handle_analyze(args)

        if args.command == "verify":
            return _handle_verify(args)
    except (ConfigError, OSError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
