"""Fold module-level imports into the directory prefix graph."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graph.models import PrefixGraph
from utils import extract_prefix

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graph.models import ModuleInfo

logger = logging.getLogger(__name__)


def build_graph(modules: Sequence[ModuleInfo]) -> PrefixGraph:
    """Build the prefix graph for a sequence of parsed modules.

    Args:
        modules: Parsed module records in discovery order

    Returns:
        PrefixGraph whose adjacency has set semantics (duplicate prefix edges
        collapse) and never contains self loops. Individual imports stay on
        the module records for attribution.
    """
    module_map: dict[str, ModuleInfo] = {}
    for module in modules:
        module_map[module.name] = module

    # dicts double as insertion-ordered sets
    adjacency: dict[str, dict[str, None]] = {}
    seen_prefixes: dict[str, None] = {}

    for module in modules:
        seen_prefixes.setdefault(module.prefix, None)
        for dep in module.dependencies:
            from_prefix = extract_prefix(dep.from_module)
            to_prefix = extract_prefix(dep.to)
            seen_prefixes.setdefault(from_prefix, None)
            seen_prefixes.setdefault(to_prefix, None)

            if from_prefix != to_prefix:
                adjacency.setdefault(from_prefix, {})[to_prefix] = None

    prefix_dependencies = {
        prefix: tuple(targets) for prefix, targets in adjacency.items()
    }
    prefixes = (
        *prefix_dependencies,
        *(prefix for prefix in seen_prefixes if prefix not in prefix_dependencies),
    )

    graph = PrefixGraph(
        module_list=tuple(modules),
        modules=module_map,
        prefix_dependencies=prefix_dependencies,
        prefixes=prefixes,
    )
    logger.debug(
        "Built prefix graph: %d modules, %d prefixes, %d edges",
        len(modules),
        len(prefixes),
        graph.edge_count,
    )
    return graph


__all__ = ["build_graph"]
