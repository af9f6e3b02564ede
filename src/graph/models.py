"""Records shared by the prefix graph engine.

Module records come from the parsing layer and are never mutated afterwards.
The prefix graph keeps every mapping in first-seen order so that traversal
order depends only on how the graph was built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

from utils import extract_prefix

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

ImportKind = Literal["import", "require", "dynamic"]


class GraphInvariantError(RuntimeError):
    """Raised when the prefix graph engine detects an internal inconsistency."""


class ModuleDependency(BaseModel):
    """A single import statement from one module to another."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    from_module: str = Field(alias="from", description="Importing module name")
    to: str = Field(description="Imported module name")
    import_type: ImportKind = Field(alias="importType")
    line: int = Field(ge=1, description="1-based source line of the import")


class ModuleInfo(BaseModel):
    """A parsed source file and the imports it declares."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    name: str
    prefix: str
    dependencies: tuple[ModuleDependency, ...] = ()

    @classmethod
    def create(
        cls,
        *,
        path: str,
        name: str,
        dependencies: Sequence[ModuleDependency] = (),
    ) -> ModuleInfo:
        return cls(
            path=path,
            name=name,
            prefix=extract_prefix(name),
            dependencies=tuple(dependencies),
        )


class FeedbackArc(BaseModel):
    """A prefix edge whose removal breaks at least one cycle."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    from_prefix: str = Field(alias="from")
    to_prefix: str = Field(alias="to")
    violations: tuple[ModuleDependency, ...] = ()


@dataclass(frozen=True)
class PrefixGraph:
    """Directory-level dependency graph.

    ``module_list`` holds every parsed record in input order, duplicates
    included; ``modules`` is a name index over it where the last record with
    a given name wins. ``prefix_dependencies`` only holds prefixes with
    outgoing edges. ``prefixes`` lists every distinct prefix: those keys first, then the
    remaining module prefixes and edge targets in first-seen order.
    """

    module_list: tuple[ModuleInfo, ...] = ()
    modules: Mapping[str, ModuleInfo] = field(default_factory=dict)
    prefix_dependencies: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    prefixes: tuple[str, ...] = ()

    def successors(self, prefix: str) -> tuple[str, ...]:
        return self.prefix_dependencies.get(prefix, ())

    def has_prefix(self, prefix: str) -> bool:
        return prefix in self._prefix_set

    def edges(self) -> Iterator[tuple[str, str]]:
        for source, targets in self.prefix_dependencies.items():
            for target in targets:
                yield source, target

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.prefix_dependencies.values())

    @property
    def module_count(self) -> int:
        return len(self.module_list)

    @property
    def import_count(self) -> int:
        return sum(len(module.dependencies) for module in self.module_list)

    @cached_property
    def _prefix_set(self) -> frozenset[str]:
        return frozenset(self.prefixes)


__all__ = [
    "FeedbackArc",
    "GraphInvariantError",
    "ImportKind",
    "ModuleDependency",
    "ModuleInfo",
    "PrefixGraph",
]
