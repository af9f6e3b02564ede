"""Graphviz DOT output for the prefix graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graph.models import FeedbackArc, PrefixGraph

FEEDBACK_EDGE_STYLE = " [color=red, style=bold]"


def _quote(identifier: str) -> str:
    escaped = identifier.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_dot_graph(graph: PrefixGraph, feedback_arcs: Sequence[FeedbackArc]) -> str:
    """Render prefix dependencies as a DOT digraph.

    Edges that belong to the feedback arc set are drawn bold red.
    """
    feedback_edges = {(arc.from_prefix, arc.to_prefix) for arc in feedback_arcs}

    lines = [
        "digraph ModuleDependencies {",
        "  rankdir=TB;",
        "  node [shape=box];",
        "",
    ]
    for source, target in graph.edges():
        style = FEEDBACK_EDGE_STYLE if (source, target) in feedback_edges else ""
        lines.append(f"  {_quote(source)} -> {_quote(target)}{style};")
    lines.append("}")

    return "\n".join(lines)


__all__ = ["render_dot_graph"]
