"""Exceptions raised by the outer layers (config, report I/O, deletion)."""

from __future__ import annotations


class DeadwoodError(Exception):
    """Base class for deadwood errors."""


class ConfigError(DeadwoodError):
    """Raised when a .deadwood.json file cannot be used."""


class ReportNotFoundError(DeadwoodError):
    """Raised when no saved analysis report exists."""


class UnsafePathError(DeadwoodError):
    """Raised when a module id points outside the analyzed directory."""
