"""Extractor stage: module text -> ModuleRecord."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from deadwood.extractor.base import DictReader, FileSystemReader, TextReader
from deadwood.extractor.js_extractor import ExtractedSpecifiers, extract_specifiers
from deadwood.models import ModuleRecord

logger = logging.getLogger(__name__)


def extract_module(module_id: str, reader: TextReader) -> ModuleRecord:
    """Extract one module's specifiers.

    Never raises: a read or parse failure degrades to an empty record so the
    module still appears in the graph as an isolated node.
    """
    try:
        found = extract_specifiers(reader.read(module_id))
    except Exception as exc:
        logger.warning("Could not read %s, treating it as having no imports: %s", module_id, exc)
        return ModuleRecord(module_id=module_id, read_error=str(exc))

    if found.has_dynamic_import:
        logger.warning(
            "%s contains dynamic imports that cannot be statically analyzed", module_id,
        )
    return ModuleRecord(
        module_id=module_id,
        direct_specifiers=found.imports,
        reexport_specifiers=found.reexports,
        has_dynamic_import=found.has_dynamic_import,
    )


def extract_modules(
    module_ids: Sequence[str],
    reader: TextReader,
    workers: int = 1,
) -> list[ModuleRecord]:
    """Extract every module, returning records in *module_ids* order."""
    if workers <= 1 or len(module_ids) < 2:
        return [extract_module(module_id, reader) for module_id in module_ids]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda m: extract_module(m, reader), module_ids))


__all__ = [
    "DictReader",
    "ExtractedSpecifiers",
    "FileSystemReader",
    "TextReader",
    "extract_module",
    "extract_modules",
    "extract_specifiers",
]
