"""Forward reachability from entry points."""

from __future__ import annotations

import logging
from typing import Iterable

from deadwood.analysis.graph_models import DependencyGraph, ReachabilityResult
from deadwood.analysis.resolver import ModuleResolver

logger = logging.getLogger(__name__)


def find_reachable(
    graph: DependencyGraph,
    entry_points: Iterable[str],
    resolver: ModuleResolver | None = None,
) -> ReachabilityResult:
    """Stack-based traversal of the forward graph.

    Seeds and dependencies are matched to canonical module ids before being
    pushed; each module is visited at most once.
    """
    resolver = resolver or ModuleResolver(graph.modules)
    visited: set[str] = set()
    unresolved: list[str] = []
    stack: list[str] = []

    for entry in entry_points:
        module_id = resolver.canonical(entry)
        if module_id is None:
            unresolved.append(entry)
            continue
        stack.append(module_id)

    if unresolved:
        logger.warning(
            "%d entry point(s) match no analyzed module: %s",
            len(unresolved), ", ".join(unresolved),
        )

    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)

        for dep in graph.forward.get(current, []):
            dep_id = resolver.canonical(dep)
            if dep_id is not None and dep_id not in visited:
                stack.append(dep_id)

    logger.info("Found %d reachable modules", len(visited))
    return ReachabilityResult(reachable=frozenset(visited), unresolved_entries=tuple(unresolved))
