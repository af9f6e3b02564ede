"""Cycle detection and strongly connected components over the prefix graph.

All traversals use an explicit stack of ``(node, successor iterator)`` frames,
which visits nodes in exactly the order a recursive depth-first search would.
Traversal state is created per call; nothing is cached between invocations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graph.attribution import attribute_arc, attribute_component
from graph.models import FeedbackArc, GraphInvariantError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from graph.models import ModuleDependency, PrefixGraph

logger = logging.getLogger(__name__)


class _CycleSearchState:
    """Mutable state for one back-edge search."""

    def __init__(self) -> None:
        self.visited: set[str] = set()
        self.on_stack: set[str] = set()


def _iter_back_edges_from(
    start: str,
    successors: Callable[[str], tuple[str, ...]],
    state: _CycleSearchState,
) -> Iterator[tuple[str, str]]:
    state.visited.add(start)
    state.on_stack.add(start)
    frames: list[tuple[str, Iterator[str]]] = [(start, iter(successors(start)))]

    while frames:
        node, pending = frames[-1]
        for neighbor in pending:
            if neighbor not in state.visited:
                state.visited.add(neighbor)
                state.on_stack.add(neighbor)
                frames.append((neighbor, iter(successors(neighbor))))
                break
            if neighbor in state.on_stack:
                yield node, neighbor
        else:
            frames.pop()
            state.on_stack.discard(node)


def iter_back_edges(graph: PrefixGraph) -> Iterator[tuple[str, str]]:
    """Yield ``(current, ancestor)`` for every back edge of a depth-first search.

    Roots are taken in ``graph.prefixes`` order and successors in adjacency
    order, so the result depends only on graph construction order.
    """
    state = _CycleSearchState()
    for prefix in graph.prefixes:
        if prefix not in state.visited:
            yield from _iter_back_edges_from(prefix, graph.successors, state)


def find_feedback_arcs(graph: PrefixGraph) -> list[FeedbackArc]:
    """Find a feedback arc set: one arc per back edge, with its imports.

    This is not guaranteed to be a minimum feedback arc set when cycles
    overlap; removing every returned arc still leaves the graph acyclic.
    """
    feedback_arcs: list[FeedbackArc] = []
    for from_prefix, to_prefix in iter_back_edges(graph):
        if not (graph.has_prefix(from_prefix) and graph.has_prefix(to_prefix)):
            msg = (
                f"Feedback arc {from_prefix!r} -> {to_prefix!r} references a "
                "prefix missing from the graph."
            )
            raise GraphInvariantError(msg)
        feedback_arcs.append(
            FeedbackArc(
                from_prefix=from_prefix,
                to_prefix=to_prefix,
                violations=tuple(attribute_arc(graph, from_prefix, to_prefix)),
            )
        )

    logger.debug("Found %d feedback arcs", len(feedback_arcs))
    return feedback_arcs


def is_acyclic(graph: PrefixGraph) -> bool:
    """Return True when the prefix graph has no cycle.

    Stops at the first back edge instead of enumerating all of them.
    """
    return next(iter_back_edges(graph), None) is None


def transpose(graph: PrefixGraph) -> dict[str, tuple[str, ...]]:
    """Return the prefix adjacency with every edge reversed."""
    transposed: dict[str, dict[str, None]] = {}
    for source, target in graph.edges():
        transposed.setdefault(target, {})[source] = None
    return {prefix: tuple(sources) for prefix, sources in transposed.items()}


def _fill_order(
    start: str,
    successors: Callable[[str], tuple[str, ...]],
    visited: set[str],
    finished: list[str],
) -> None:
    """Append nodes reachable from ``start`` to ``finished`` in post-order."""
    visited.add(start)
    frames: list[tuple[str, Iterator[str]]] = [(start, iter(successors(start)))]

    while frames:
        node, pending = frames[-1]
        for neighbor in pending:
            if neighbor not in visited:
                visited.add(neighbor)
                frames.append((neighbor, iter(successors(neighbor))))
                break
        else:
            frames.pop()
            finished.append(node)


def _collect_component(
    start: str,
    transposed: Mapping[str, tuple[str, ...]],
    visited: set[str],
) -> tuple[str, ...]:
    """Collect nodes reachable from ``start`` in the transposed graph, pre-order."""
    visited.add(start)
    component = [start]
    frames: list[Iterator[str]] = [iter(transposed.get(start, ()))]

    while frames:
        for neighbor in frames[-1]:
            if neighbor not in visited:
                visited.add(neighbor)
                component.append(neighbor)
                frames.append(iter(transposed.get(neighbor, ())))
                break
        else:
            frames.pop()

    return tuple(component)


def _check_partition(graph: PrefixGraph, components: list[tuple[str, ...]]) -> None:
    assigned: set[str] = set()
    for component in components:
        for prefix in component:
            if prefix in assigned:
                msg = f"Prefix {prefix!r} assigned to more than one component."
                raise GraphInvariantError(msg)
            if not graph.has_prefix(prefix):
                msg = f"Component references undeclared prefix {prefix!r}."
                raise GraphInvariantError(msg)
            assigned.add(prefix)

    if len(assigned) != len(graph.prefixes):
        missing = [prefix for prefix in graph.prefixes if prefix not in assigned]
        msg = f"Prefixes missing from component partition: {missing!r}"
        raise GraphInvariantError(msg)


def find_strongly_connected_components(
    graph: PrefixGraph,
) -> list[tuple[str, ...]]:
    """Find strongly connected components with Kosaraju's two-pass algorithm.

    Args:
        graph: Prefix graph to partition

    Returns:
        Components in discovery order (reverse finishing order of the first
        pass). Together they cover every prefix in the graph exactly once.

    Raises:
        GraphInvariantError: If the components do not partition the prefixes.
    """
    visited: set[str] = set()
    finished: list[str] = []
    for prefix in graph.prefixes:
        if prefix not in visited:
            _fill_order(prefix, graph.successors, visited, finished)

    transposed = transpose(graph)
    visited = set()
    components: list[tuple[str, ...]] = []
    while finished:
        vertex = finished.pop()
        if vertex not in visited:
            components.append(_collect_component(vertex, transposed, visited))

    _check_partition(graph, components)
    return components


def detect_violations(
    graph: PrefixGraph,
    components: list[tuple[str, ...]] | None = None,
) -> list[ModuleDependency]:
    """Return every cross-prefix import inside a non-trivial component.

    Unlike :func:`find_feedback_arcs`, this reports all imports taking part
    in a cycle, not a minimal set to remove.
    """
    if components is None:
        components = find_strongly_connected_components(graph)

    violations: list[ModuleDependency] = []
    for component in components:
        if len(component) > 1:
            violations.extend(attribute_component(graph, component))

    logger.debug("Found %d cycle violations", len(violations))
    return violations


__all__ = [
    "detect_violations",
    "find_feedback_arcs",
    "find_strongly_connected_components",
    "is_acyclic",
    "iter_back_edges",
    "transpose",
]
