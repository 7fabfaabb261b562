"""Entry point discovery by filename convention and package.json."""

from __future__ import annotations

import json
import logging
import posixpath
from pathlib import Path
from typing import Iterable

from deadwood.analysis.resolver import strip_extension
from deadwood.models import DEFAULT_ENTRY_DIRS, DEFAULT_ENTRY_NAMES, SOURCE_EXTENSIONS

logger = logging.getLogger(__name__)


def discover_entry_points(
    root: Path,
    paths: Iterable[str],
    entry_names: Iterable[str] = DEFAULT_ENTRY_NAMES,
    entry_dirs: Iterable[str] = DEFAULT_ENTRY_DIRS,
    extra: Iterable[str] = (),
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
) -> list[str]:
    """Collect entry point module ids, deduplicated in first-seen order.

    Sources, in order: files whose stem is an entry name (anywhere in the
    tree), files under an entry directory (``api/``, ``routes/``), the
    package.json ``main``/``module``/``bin`` fields, then *extra*.
    """
    names = set(entry_names)
    dirs = set(entry_dirs)
    module_ids = [strip_extension(p, extensions) for p in paths]

    found: list[str] = []
    for module_id in module_ids:
        if posixpath.basename(module_id) in names:
            found.append(module_id)
    for module_id in module_ids:
        if dirs.intersection(module_id.split("/")[:-1]):
            found.append(module_id)
    found.extend(_package_json_entries(Path(root), extensions))
    found.extend(normalize_entry(e, extensions) for e in extra)
    return list(dict.fromkeys(found))


def normalize_entry(entry: str, extensions: tuple[str, ...] = SOURCE_EXTENSIONS) -> str:
    entry = entry.strip().replace("\\", "/")
    if entry.startswith("./"):
        entry = entry[2:]
    return strip_extension(entry, extensions)


def _package_json_entries(root: Path, extensions: tuple[str, ...]) -> list[str]:
    manifest = root / "package.json"
    if not manifest.is_file():
        return []
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable package.json at %s: %s", manifest, exc)
        return []
    if not isinstance(data, dict):
        return []

    entries: list[str] = []
    for key in ("main", "module"):
        value = data.get(key)
        if isinstance(value, str) and value:
            entries.append(normalize_entry(value, extensions))
    bin_field = data.get("bin")
    if isinstance(bin_field, str):
        entries.append(normalize_entry(bin_field, extensions))
    elif isinstance(bin_field, dict):
        entries.extend(
            normalize_entry(v, extensions) for v in bin_field.values() if isinstance(v, str)
        )
    return entries
