"""Reverse-import chain enumeration for unreachable modules.

A chain starts at the traced module and walks importer edges until it reaches a
root (a module nobody imports). Every distinct path is enumerated, so the
number of chains can grow exponentially with fan-in; ``max_chains`` and
``max_depth`` cap the work per traced module.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from deadwood.analysis.graph_models import TraceResult
from deadwood.models import Chain

logger = logging.getLogger(__name__)


class ChainTracer:

    def __init__(
        self,
        reverse_index: Mapping[str, Sequence[str]],
        max_chains: int | None = None,
        max_depth: int | None = None,
    ):
        self.reverse_index = reverse_index
        self.max_chains = max_chains
        self.max_depth = max_depth

    def trace(self, module_id: str) -> TraceResult:
        """Enumerate all root-terminated chains starting at *module_id*.

        The visited set belongs to one path only: a branch that meets a module
        already on its own path stops there (recorded under ``cycles``), while
        the same module may still appear on sibling paths.
        """
        chains: list[Chain] = []
        cycles: list[Chain] = []
        truncated = False

        # (module, path so far, modules on that path)
        stack: list[tuple[str, Chain, frozenset[str]]] = [(module_id, (), frozenset())]
        while stack:
            current, parent_path, on_path = stack.pop()
            if current in on_path:
                cycles.append(parent_path + (current,))
            else:
                path = parent_path + (current,)
                importers = self.reverse_index.get(current, ())
                if not importers:
                    chains.append(path)
                elif self.max_depth is not None and len(path) >= self.max_depth:
                    truncated = True
                    continue
                else:
                    visited = on_path | {current}
                    # Reversed so importers are explored in index order
                    for importer in reversed(importers):
                        stack.append((importer, path, visited))
                    continue

            if self.max_chains is not None and len(chains) + len(cycles) >= self.max_chains:
                if stack:
                    truncated = True
                break

        if truncated:
            logger.warning(
                "Chain tracing for %s stopped early (max_chains=%s, max_depth=%s)",
                module_id, self.max_chains, self.max_depth,
            )
        return TraceResult(chains=tuple(chains), cycles=tuple(cycles), truncated=truncated)
