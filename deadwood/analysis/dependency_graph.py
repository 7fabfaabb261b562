"""Dependency graph builder: resolves specifiers, inlines barrel re-exports, inverts edges."""

from __future__ import annotations

import logging
import posixpath
from typing import Iterable, Mapping, Sequence

from deadwood.analysis.graph_models import DependencyEdge, DependencyGraph, Resolved
from deadwood.analysis.resolver import ModuleResolver, module_dir
from deadwood.models import SOURCE_EXTENSIONS, GraphStats, ModuleRecord

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Build a module-level dependency graph from extraction records."""

    def __init__(
        self,
        extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
        barrel_names: tuple[str, ...] = ("index",),
        follow_reexports: bool = False,
    ):
        self.extensions = extensions
        self.barrel_names = barrel_names
        self.follow_reexports = follow_reexports

    def resolver_for(self, module_ids: Iterable[str]) -> ModuleResolver:
        return ModuleResolver(module_ids, self.extensions, self.barrel_names)

    def build(self, records: Sequence[ModuleRecord]) -> DependencyGraph:
        graph = DependencyGraph()

        # Step 1: Register every module, merging records that share an id
        for record in records:
            existing = graph.modules.get(record.module_id)
            graph.modules[record.module_id] = _merge(existing, record) if existing else record
            graph.forward[record.module_id] = []

        resolver = self.resolver_for(graph.modules)
        stats = GraphStats(module_count=len(graph.modules))
        barrels: dict[str, list[str]] = {}  # barrel id -> resolved re-exports

        # Step 2: Direct imports
        for module_id, record in graph.modules.items():
            specifiers = record.direct_specifiers
            if self.follow_reexports:
                specifiers = specifiers + record.reexport_specifiers
            for target_id in self._resolve_all(resolver, module_id, specifiers, stats):
                self._add_edge(graph, module_id, target_id, "import")

        # Step 3: One level of barrel inlining, appended after direct deps
        for module_id in graph.modules:
            for dep_id in list(graph.forward[module_id]):
                if not self.is_barrel(graph.modules[dep_id]):
                    continue
                if dep_id not in barrels:
                    barrels[dep_id] = self._resolve_all(
                        resolver, dep_id, graph.modules[dep_id].reexport_specifiers, stats,
                    )
                for target_id in barrels[dep_id]:
                    if self._add_edge(graph, module_id, target_id, "barrel", via=dep_id):
                        stats.barrel_edges_added += 1
                        logger.debug("%s -> %s via barrel %s", module_id, target_id, dep_id)

        stats.barrel_count = len(barrels)
        graph.stats = stats
        logger.info(
            "Built dependency graph for %d modules (%d barrels adding %d dependencies)",
            stats.module_count, stats.barrel_count, stats.barrel_edges_added,
        )
        return graph

    def is_barrel(self, record: ModuleRecord) -> bool:
        name = posixpath.basename(record.module_id)
        return name in self.barrel_names and bool(record.reexport_specifiers)

    @staticmethod
    def _resolve_all(
        resolver: ModuleResolver,
        importer_id: str,
        specifiers: Iterable[str],
        stats: GraphStats,
    ) -> list[str]:
        importer_dir = module_dir(importer_id)
        resolved: list[str] = []
        for spec in specifiers:
            result = resolver.resolve(spec, importer_dir)
            if isinstance(result, Resolved):
                resolved.append(result.module_id)
            else:
                stats.unresolved_specifiers += 1
                logger.debug("Unresolved %r in %s (tried %s)", spec, importer_id, result.candidate)
        return resolved

    @staticmethod
    def _add_edge(
        graph: DependencyGraph,
        source_id: str,
        target_id: str,
        edge_type: str,
        via: str = "",
    ) -> bool:
        # No self edges, no duplicates
        if target_id == source_id or target_id in graph.forward[source_id]:
            return False
        graph.forward[source_id].append(target_id)
        graph.edges.append(DependencyEdge(source_id, target_id, edge_type, via))
        return True


def build_reverse_index(forward: Mapping[str, Sequence[str]]) -> dict[str, tuple[str, ...]]:
    """Invert importer -> imported into imported -> importers.

    Every module of *forward* is a key; importers keep forward-graph order.
    """
    reverse: dict[str, list[str]] = {module_id: [] for module_id in forward}
    for importer, deps in forward.items():
        for dep in deps:
            importers = reverse.setdefault(dep, [])
            if importer not in importers:
                importers.append(importer)
    return {module_id: tuple(importers) for module_id, importers in reverse.items()}


def _merge(first: ModuleRecord, second: ModuleRecord) -> ModuleRecord:
    """Combine two records for files sharing one module id (a.ts + a.js)."""
    return ModuleRecord(
        module_id=first.module_id,
        direct_specifiers=_union(first.direct_specifiers, second.direct_specifiers),
        reexport_specifiers=_union(first.reexport_specifiers, second.reexport_specifiers),
        has_dynamic_import=first.has_dynamic_import or second.has_dynamic_import,
        read_error=first.read_error or second.read_error,
    )


def _union(a: tuple[str, ...], b: tuple[str, ...]) -> tuple[str, ...]:
    return a + tuple(s for s in b if s not in a)
