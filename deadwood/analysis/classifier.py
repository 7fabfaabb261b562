"""Label unreachable modules as orphaned, false positive or transitive dead code."""

from __future__ import annotations

from typing import AbstractSet, Sequence

from deadwood.analysis.graph_models import TraceResult
from deadwood.models import ChainAnalysis, Classification


def classify(
    module_id: str,
    trace: TraceResult,
    imported_by: Sequence[str],
    reachable: AbstractSet[str],
) -> ChainAnalysis:
    """Build the chain-analysis record for one unreachable module.

    Only chain roots are checked against *reachable*; an intermediate module
    that is reachable through some other path does not flip the result.
    """
    chains = trace.chains
    orphaned = not imported_by or (len(chains) == 1 and len(chains[0]) == 1)
    reachable_roots = tuple(dict.fromkeys(c[-1] for c in chains if c[-1] in reachable))

    if orphaned:
        classification = Classification.ORPHANED
        max_depth = 1
        summary = "Orphaned - not imported by any module"
    elif reachable_roots:
        classification = Classification.FALSE_POSITIVE
        max_depth = max(len(c) for c in chains)
        hits = sum(1 for c in chains if c[-1] in reachable)
        summary = f"FALSE POSITIVE - {hits} chain(s) lead to reachable code"
    else:
        classification = Classification.TRANSITIVE_DEAD
        max_depth = max((len(c) for c in chains + trace.cycles), default=0)
        if chains:
            summary = f"Transitive dead code - {len(chains)} chain(s), max depth {max_depth}"
        elif not trace.cycles:
            summary = "Transitive dead code - chain tracing stopped before reaching a root"
        else:
            summary = f"Transitive dead code - only imported from a dead import cycle ({len(trace.cycles)} loop(s))"

    return ChainAnalysis(
        module_id=module_id,
        classification=classification,
        chains=chains,
        imported_by=tuple(imported_by),
        reachable_roots=reachable_roots,
        cycles=trace.cycles,
        max_depth=max_depth,
        truncated=trace.truncated,
        summary=summary,
    )
