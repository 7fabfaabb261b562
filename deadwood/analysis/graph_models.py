"""Data models for the module dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from deadwood.models import Chain, GraphStats, ModuleRecord


@dataclass(frozen=True)
class Resolved:
    specifier: str
    module_id: str


@dataclass(frozen=True)
class Unresolved:
    specifier: str
    candidate: str  # normalized path that matched no module


Resolution = Union[Resolved, Unresolved]


@dataclass(frozen=True)
class DependencyEdge:
    source_id: str
    target_id: str
    edge_type: str  # "import" | "barrel"
    via: str = ""  # barrel module id for barrel edges


@dataclass
class DependencyGraph:
    modules: dict[str, ModuleRecord] = field(default_factory=dict)
    forward: dict[str, list[str]] = field(default_factory=dict)  # importer -> [imported]
    edges: list[DependencyEdge] = field(default_factory=list)
    stats: GraphStats = field(default_factory=GraphStats)


@dataclass(frozen=True)
class ReachabilityResult:
    reachable: frozenset[str]
    unresolved_entries: tuple[str, ...] = ()


@dataclass(frozen=True)
class TraceResult:
    chains: tuple[Chain, ...] = ()
    cycles: tuple[Chain, ...] = ()
    truncated: bool = False
