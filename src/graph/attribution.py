"""Map prefix-level cycle findings back to the imports that cause them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from utils import extract_prefix

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator

    from graph.models import ModuleDependency, ModuleInfo, PrefixGraph


def _iter_prefixed_modules(
    graph: PrefixGraph,
) -> Iterator[tuple[str, ModuleInfo]]:
    for module in graph.module_list:
        yield extract_prefix(module.name), module


def attribute_arc(
    graph: PrefixGraph,
    from_prefix: str,
    to_prefix: str,
) -> list[ModuleDependency]:
    """Return every import from a module under ``from_prefix`` into ``to_prefix``.

    Results follow module input order, then source order inside each
    module. Repeated imports on different lines are all reported.
    """
    violations: list[ModuleDependency] = []
    for module_prefix, module in _iter_prefixed_modules(graph):
        if module_prefix != from_prefix:
            continue
        for dep in module.dependencies:
            if extract_prefix(dep.to) == to_prefix:
                violations.append(dep)
    return violations


def attribute_component(
    graph: PrefixGraph,
    component: Collection[str],
) -> list[ModuleDependency]:
    """Return every cross-prefix import whose endpoints both lie in ``component``."""
    members = frozenset(component)
    violations: list[ModuleDependency] = []
    for module_prefix, module in _iter_prefixed_modules(graph):
        if module_prefix not in members:
            continue
        for dep in module.dependencies:
            dep_prefix = extract_prefix(dep.to)
            if dep_prefix in members and dep_prefix != module_prefix:
                violations.append(dep)
    return violations


__all__ = ["attribute_arc", "attribute_component"]
