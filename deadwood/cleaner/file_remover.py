"""Locate and delete the files backing a module id."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from deadwood.errors import UnsafePathError
from deadwood.models import SOURCE_EXTENSIONS

logger = logging.getLogger(__name__)


@dataclass
class DeletionResult:
    module_id: str
    success: bool
    deleted_files: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "file": self.module_id,
            "success": self.success,
            "deleted_files": self.deleted_files,
            "error": self.error,
        }


def safe_module_path(target_dir: Path, module_id: str) -> Path:
    """Return ``target_dir/module_id`` or raise if it escapes *target_dir*."""
    root = Path(target_dir).resolve()
    candidate = (root / module_id).resolve()
    if not module_id or candidate == root or not candidate.is_relative_to(root):
        raise UnsafePathError(f"Refusing to touch {module_id!r}: outside {root}")
    return candidate


def backing_files(
    target_dir: Path,
    module_id: str,
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
) -> list[Path]:
    """Existing files for *module_id*, one per recognized extension."""
    base = safe_module_path(target_dir, module_id)
    return [
        base.with_name(base.name + ext)
        for ext in extensions
        if base.with_name(base.name + ext).is_file()
    ]


def delete_modules(
    target_dir: Path,
    module_ids: Iterable[str],
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
) -> list[DeletionResult]:
    """Delete every backing file of each module.

    Raises UnsafePathError before deleting anything if any id points outside
    *target_dir*.
    """
    root = Path(target_dir).resolve()
    planned = [(m, backing_files(root, m, extensions)) for m in module_ids]

    results: list[DeletionResult] = []
    for module_id, files in planned:
        if not files:
            results.append(DeletionResult(module_id, False, error="File not found"))
            continue
        deleted: list[str] = []
        try:
            for path in files:
                path.unlink()
                deleted.append(path.relative_to(root).as_posix())
        except OSError as exc:
            logger.warning("Failed to delete %s: %s", module_id, exc)
            results.append(DeletionResult(module_id, False, deleted, str(exc)))
            continue
        logger.info("Deleted %s (%s)", module_id, ", ".join(deleted))
        results.append(DeletionResult(module_id, True, deleted))
    return results
