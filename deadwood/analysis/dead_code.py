"""Dead code detector: reachability from entry points plus reverse-chain explanations."""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Sequence

from deadwood.analysis.chain_tracer import ChainTracer
from deadwood.analysis.classifier import classify
from deadwood.analysis.dependency_graph import DependencyGraphBuilder, build_reverse_index
from deadwood.analysis.graph_models import DependencyGraph
from deadwood.analysis.reachability import find_reachable
from deadwood.models import AnalysisReport, ChainAnalysis, ModuleRecord

logger = logging.getLogger(__name__)


def detect_dead_code(
    records: Sequence[ModuleRecord],
    entry_points: Sequence[str],
    builder: DependencyGraphBuilder | None = None,
    max_chains: int | None = None,
    max_depth: int | None = None,
) -> AnalysisReport:
    """Run the full analysis over already-extracted modules.

    A pure function of its inputs: the same records and entry points always
    give the same report. No entry points is not an error; every module is
    then unreachable.
    """
    builder = builder or DependencyGraphBuilder()
    graph = builder.build(records)
    resolver = builder.resolver_for(graph.modules)

    if not entry_points:
        logger.warning("No entry points given; every module will be reported unreachable")
    reach = find_reachable(graph, entry_points, resolver)
    unreachable = tuple(m for m in graph.modules if m not in reach.reachable)

    chain_analysis = explain_unreachable(
        graph, unreachable, reach.reachable, max_chains=max_chains, max_depth=max_depth,
    )
    dynamic = tuple(m for m, r in graph.modules.items() if r.has_dynamic_import)

    return AnalysisReport(
        total_modules=len(graph.modules),
        reachable=reach.reachable,
        unreachable=unreachable,
        entry_points=tuple(entry_points),
        chain_analysis=chain_analysis,
        dynamic_import_modules=dynamic,
        unresolved_entry_points=reach.unresolved_entries,
        graph_stats=graph.stats,
    )


def explain_unreachable(
    graph: DependencyGraph,
    unreachable: Iterable[str],
    reachable: AbstractSet[str],
    max_chains: int | None = None,
    max_depth: int | None = None,
) -> dict[str, ChainAnalysis]:
    """Trace and classify each unreachable module independently."""
    reverse = build_reverse_index(graph.forward)
    tracer = ChainTracer(reverse, max_chains=max_chains, max_depth=max_depth)

    results: dict[str, ChainAnalysis] = {}
    for module_id in unreachable:
        trace = tracer.trace(module_id)
        results[module_id] = classify(module_id, trace, reverse.get(module_id, ()), reachable)
    return results
