"""Determinism verification for stored JSON reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from analysis.run import analyze_directories
from report.json_report import render_json_report

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from config.loader import DircycleConfig


@dataclass(frozen=True)
class ReportCheckResult:
    ok: bool
    report_path: Path
    has_violations: bool = False


def verify_report(
    directories: Sequence[Path],
    *,
    report_path: Path,
    config: DircycleConfig | None = None,
) -> ReportCheckResult:
    """Verify that a stored JSON report matches a fresh analysis.

    Re-runs the analysis over ``directories`` and compares the rendered JSON
    byte-for-byte with the contents of ``report_path``.

    Args:
        directories: Source directories that produced the stored report.
        report_path: JSON report written by an earlier ``analyze --json`` run.
        config: Optional configuration; defaults apply when omitted.

    Returns:
        ReportCheckResult with the comparison outcome.

    Raises:
        FileNotFoundError: If report_path does not exist.
        IsADirectoryError: If report_path is a directory.
    """
    if not report_path.exists():
        msg = f"Report file does not exist: {report_path}"
        raise FileNotFoundError(msg)
    if report_path.is_dir():
        msg = f"Report path is a directory: {report_path}"
        raise IsADirectoryError(msg)

    result = analyze_directories(directories, config=config)
    regenerated = render_json_report(result)

    return ReportCheckResult(
        ok=report_path.read_bytes() == regenerated,
        report_path=report_path,
        has_violations=result.has_violations,
    )
