"""JSON report document for analysis results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from analysis.result import AnalysisSummary
from graph.models import FeedbackArc, ModuleDependency
from report.utils import _dumps_json

if TYPE_CHECKING:
    from analysis.result import AnalysisResult

# Schema version constant
SCHEMA_VERSION = 1


class ReportDocument(BaseModel):
    """Machine-readable report of one analysis run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_version: int = Field(default=SCHEMA_VERSION, alias="schemaVersion")
    summary: AnalysisSummary
    feedback_arcs: list[FeedbackArc] = Field(
        default_factory=list, alias="feedbackArcs"
    )
    violations: list[ModuleDependency] = Field(default_factory=list)
    prefix_dependencies: dict[str, list[str]] = Field(
        default_factory=dict,
        alias="prefixDependencies",
        description="Every prefix mapped to the prefixes it depends on",
    )


def build_json_document(result: AnalysisResult) -> ReportDocument:
    graph = result.graph
    return ReportDocument(
        summary=result.summary(),
        feedback_arcs=list(result.feedback_arcs),
        violations=list(result.violations),
        prefix_dependencies={
            prefix: list(graph.successors(prefix)) for prefix in graph.prefixes
        },
    )


def render_json_report(result: AnalysisResult) -> bytes:
    """Render the report as indented JSON with sorted keys."""
    return _dumps_json(build_json_document(result))


__all__ = [
    "SCHEMA_VERSION",
    "ReportDocument",
    "build_json_document",
    "render_json_report",
]
