"""Directory prefix graph engine."""

from graph.algos import (
    detect_violations,
    find_feedback_arcs,
    find_strongly_connected_components,
    is_acyclic,
)
from graph.attribution import attribute_arc, attribute_component
from graph.builder import build_graph
from graph.models import (
    FeedbackArc,
    GraphInvariantError,
    ImportKind,
    ModuleDependency,
    ModuleInfo,
    PrefixGraph,
)

__all__ = [
    "FeedbackArc",
    "GraphInvariantError",
    "ImportKind",
    "ModuleDependency",
    "ModuleInfo",
    "PrefixGraph",
    "attribute_arc",
    "attribute_component",
    "build_graph",
    "detect_violations",
    "find_feedback_arcs",
    "find_strongly_connected_components",
    "is_acyclic",
]
