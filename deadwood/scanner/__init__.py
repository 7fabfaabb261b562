"""Scanner layer: source files and entry points."""

from __future__ import annotations

from deadwood.scanner.base import SourceScanner
from deadwood.scanner.entry_points import discover_entry_points, normalize_entry

__all__ = ["SourceScanner", "discover_entry_points", "normalize_entry"]
