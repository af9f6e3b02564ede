"""Analysis result structures handed to report renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from graph.models import FeedbackArc, ModuleDependency, PrefixGraph


class AnalysisSummary(BaseModel):
    """Headline counts for one analysis run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_modules: int = Field(alias="totalModules")
    total_imports: int = Field(alias="totalImports")
    prefix_count: int = Field(
        alias="prefixCount",
        description="Every distinct prefix, including ones that are only imported",
    )
    violation_count: int = Field(alias="violationCount")
    feedback_arc_count: int = Field(alias="feedbackArcCount")
    is_acyclic: bool = Field(alias="isAcyclic")


@dataclass(frozen=True)
class AnalysisResult:
    graph: PrefixGraph
    feedback_arcs: tuple[FeedbackArc, ...] = field(default_factory=tuple)
    violations: tuple[ModuleDependency, ...] = field(default_factory=tuple)
    components: tuple[tuple[str, ...], ...] = field(default_factory=tuple)
    is_acyclic: bool = True

    @property
    def has_violations(self) -> bool:
        """True when the run should be reported as a failure."""
        return bool(self.violations) or bool(self.feedback_arcs)

    @property
    def cyclic_components(self) -> tuple[tuple[str, ...], ...]:
        return tuple(component for component in self.components if len(component) > 1)

    def summary(self) -> AnalysisSummary:
        return AnalysisSummary(
            total_modules=self.graph.module_count,
            total_imports=self.graph.import_count,
            prefix_count=len(self.graph.prefixes),
            violation_count=len(self.violations),
            feedback_arc_count=len(self.feedback_arcs),
            is_acyclic=self.is_acyclic,
        )


__all__ = ["AnalysisResult", "AnalysisSummary"]
