"""Human-readable text report."""

from __future__ import annotations

from typing import TYPE_CHECKING

from utils import extract_prefix

if TYPE_CHECKING:
    from collections.abc import Sequence

    from analysis.result import AnalysisResult
    from graph.models import FeedbackArc, ModuleDependency

REPORT_TITLE = "Directory Dependency Analysis Report"

RECOMMENDATIONS = (
    "Consider restructuring modules to eliminate circular dependencies",
    "Move shared code to a common base module",
    "Use dependency injection to break tight coupling",
    "Consider splitting large modules into smaller, focused ones",
)


def _format_violation(dep: ModuleDependency) -> str:
    return f"  {dep.from_module}:{dep.line} -> {dep.to} ({dep.import_type})"


def _summary_lines(result: AnalysisResult) -> list[str]:
    summary = result.summary()
    lines = [
        f"Total modules analyzed: {summary.total_modules}",
        f"Total imports analyzed: {summary.total_imports}",
        f"Module prefixes found: {summary.prefix_count}",
        f"Dependency violations found: {summary.violation_count}",
        f"Feedback arcs detected: {summary.feedback_arc_count}",
        "",
    ]
    if summary.is_acyclic:
        lines.append("✅ Module prefix dependencies form a DAG (no cycles detected)")
    else:
        lines.append("❌ Module prefix dependencies contain cycles")
    lines.append("")
    return lines


def _feedback_arc_lines(feedback_arcs: Sequence[FeedbackArc]) -> list[str]:
    lines = [
        "Feedback Arc Set (edges to remove to make graph acyclic):",
        "--------------------------------------------------------",
    ]
    for arc in feedback_arcs:
        lines.append(f"{arc.from_prefix} -> {arc.to_prefix}")
        lines.extend(
            f"  {dep.from_module}:{dep.line} imports {dep.to} ({dep.import_type})"
            for dep in arc.violations
        )
        lines.append("")
    return lines


def group_violations(
    violations: Sequence[ModuleDependency],
) -> dict[tuple[str, str], list[ModuleDependency]]:
    """Group violations by ``(source prefix, target prefix)`` in first-seen order."""
    grouped: dict[tuple[str, str], list[ModuleDependency]] = {}
    for dep in violations:
        key = (extract_prefix(dep.from_module), extract_prefix(dep.to))
        grouped.setdefault(key, []).append(dep)
    return grouped


def _violation_lines(violations: Sequence[ModuleDependency]) -> list[str]:
    lines = ["Dependency Violations:", "---------------------"]
    grouped = group_violations(violations)
    processed: set[tuple[str, str]] = set()

    for pair, deps in grouped.items():
        if pair in processed:
            continue

        from_prefix, to_prefix = pair
        reverse_pair = (to_prefix, from_prefix)
        reverse_deps = grouped.get(reverse_pair)

        if reverse_deps is not None:
            lines.append(f"{from_prefix} -> {to_prefix} (mutual dependency):")
            lines.extend(_format_violation(dep) for dep in deps)
            lines.append(f"{to_prefix} -> {from_prefix}:")
            lines.extend(_format_violation(dep) for dep in reverse_deps)
            processed.add(reverse_pair)
        else:
            lines.append(f"{from_prefix} -> {to_prefix}:")
            lines.extend(_format_violation(dep) for dep in deps)
        processed.add(pair)
        lines.append("")

    return lines


def render_text_report(result: AnalysisResult) -> str:
    """Render the full plain-text report for an analysis result."""
    lines = [REPORT_TITLE, "=" * len(REPORT_TITLE), ""]
    lines.extend(_summary_lines(result))

    if result.feedback_arcs:
        lines.extend(_feedback_arc_lines(result.feedback_arcs))

    if result.violations:
        lines.extend(_violation_lines(result.violations))

    if result.has_violations:
        lines.extend(["Recommendations:", "---------------"])
        lines.extend(
            f"{index}. {text}" for index, text in enumerate(RECOMMENDATIONS, start=1)
        )
    else:
        lines.append("🎉 No violations found! Module structure follows proper hierarchy.")

    return "\n".join(lines)


__all__ = ["group_violations", "render_text_report"]
