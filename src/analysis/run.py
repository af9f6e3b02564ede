"""Top-level analysis entry points."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from analysis.result import AnalysisResult
from graph.algos import (
    detect_violations,
    find_feedback_arcs,
    find_strongly_connected_components,
    is_acyclic,
)
from graph.builder import build_graph
from graph.models import ModuleInfo
from parse.modules import parse_directory

if TYPE_CHECKING:
    from collections.abc import Sequence

    from config.loader import DircycleConfig

logger = logging.getLogger(__name__)


def analyze(modules: Sequence[ModuleInfo]) -> AnalysisResult:
    """Analyze parsed modules for cyclic directory dependencies.

    Args:
        modules: Module records in discovery order

    Returns:
        AnalysisResult with the prefix graph, the feedback arc set and every
        import that lies inside a cyclic component. Empty input produces an
        acyclic result with no findings.
    """
    graph = build_graph(modules)
    feedback_arcs = find_feedback_arcs(graph)
    components = find_strongly_connected_components(graph)
    violations = detect_violations(graph, components)

    result = AnalysisResult(
        graph=graph,
        feedback_arcs=tuple(feedback_arcs),
        violations=tuple(violations),
        components=tuple(components),
        is_acyclic=is_acyclic(graph),
    )
    logger.debug(
        "Analysis complete: %d feedback arcs, %d violations, %d cyclic components",
        len(result.feedback_arcs),
        len(result.violations),
        len(result.cyclic_components),
    )
    return result


def _directory_labels(directories: Sequence[Path]) -> list[str | None]:
    """Name each directory relative to the deepest directory containing all of them.

    A single directory, or one that is that common ancestor itself, gets no
    label so its module names stay exactly as parsed.
    """
    if len(directories) < 2:
        return [None] * len(directories)

    common = Path(os.path.commonpath(directories))
    labels: list[str | None] = []
    for directory in directories:
        relative = directory.relative_to(common).as_posix()
        labels.append(None if relative == "." else relative)
    return labels


def _with_label(module: ModuleInfo, label: str) -> ModuleInfo:
    def qualify(name: str) -> str:
        return f"{label}/{name}"

    return ModuleInfo.create(
        path=module.path,
        name=qualify(module.name),
        dependencies=[
            dep.model_copy(
                update={"from_module": qualify(dep.from_module), "to": qualify(dep.to)}
            )
            for dep in module.dependencies
        ],
    )


def analyze_directories(
    directories: Sequence[Path],
    *,
    config: DircycleConfig | None = None,
) -> AnalysisResult:
    """Parse every directory in order and analyze the combined module list.

    With more than one directory, module names are prefixed by each
    directory's path relative to their common ancestor, so trees with the
    same layout do not share prefixes. Repeated directories are parsed once.
    """
    resolved = list(
        dict.fromkeys(directory.expanduser().resolve() for directory in directories)
    )

    modules: list[ModuleInfo] = []
    for directory, label in zip(resolved, _directory_labels(resolved), strict=True):
        parsed = parse_directory(directory, config=config)
        if label is None:
            modules.extend(parsed)
        else:
            modules.extend(_with_label(module, label) for module in parsed)
    return analyze(modules)


__all__ = ["analyze", "analyze_directories"]
