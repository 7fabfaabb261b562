"""Cleaner layer: act on a saved analysis report."""

from __future__ import annotations

from typing import Any, Iterable

from deadwood.cleaner.deletion_script import generate_deletion_script
from deadwood.cleaner.file_remover import DeletionResult, backing_files, delete_modules
from deadwood.models import Classification

# False positives point at resolution gaps, not dead code
DEFAULT_DELETABLE = (Classification.ORPHANED, Classification.TRANSITIVE_DEAD)


def select_modules(
    report: dict[str, Any],
    classifications: Iterable[Classification | str] = DEFAULT_DELETABLE,
) -> list[str]:
    """Pick unreachable module ids from a saved report by classification."""
    wanted = {Classification(c).value for c in classifications}
    chain_analysis = report.get("chain_analysis", {})
    return [
        module_id
        for module_id in report.get("unreachable", [])
        if chain_analysis.get(module_id, {}).get("classification") in wanted
    ]


__all__ = [
    "DEFAULT_DELETABLE",
    "DeletionResult",
    "backing_files",
    "delete_modules",
    "generate_deletion_script",
    "select_modules",
]
