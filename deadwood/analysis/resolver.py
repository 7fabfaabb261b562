"""Map relative specifiers onto the known module set."""

from __future__ import annotations

import posixpath
from typing import Iterable

from deadwood.analysis.graph_models import Resolution, Resolved, Unresolved
from deadwood.models import SOURCE_EXTENSIONS


def strip_extension(path: str, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> str:
    for ext in extensions:
        if path.endswith(ext) and len(path) > len(ext):
            return path[: -len(ext)]
    return path


def module_dir(module_id: str) -> str:
    return posixpath.dirname(module_id)


class ModuleResolver:
    """Resolve specifiers against a fixed set of module ids.

    Probing order for a normalized candidate ``p``: ``p``, ``p + ext`` for each
    extension, ``p/index``, ``p/index + ext``. When a file form and an index form
    both match, the index form wins unless the specifier spelled out a source
    extension (``./lib.js`` still falls back to ``lib/index``).
    """

    def __init__(
        self,
        known_ids: Iterable[str],
        extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
        index_names: tuple[str, ...] = ("index",),
    ):
        self.known = frozenset(known_ids)
        self.extensions = extensions
        self.index_names = index_names

    def resolve(self, specifier: str, importer_dir: str) -> Resolution:
        candidate = self.normalize(specifier, importer_dir)
        if candidate is None:
            return Unresolved(specifier, specifier)
        explicit_ext = strip_extension(specifier, self.extensions) != specifier
        module_id = self.match(candidate, prefer_file=explicit_ext)
        if module_id is None:
            return Unresolved(specifier, candidate)
        return Resolved(specifier, module_id)

    def normalize(self, specifier: str, importer_dir: str) -> str | None:
        """Join *specifier* onto *importer_dir*; None when it escapes the root."""
        joined = posixpath.normpath(posixpath.join(importer_dir, specifier))
        if joined == ".." or joined.startswith("../"):
            return None
        if joined == ".":
            joined = ""
        return strip_extension(joined, self.extensions)

    def match(self, candidate: str, prefer_file: bool = False) -> str | None:
        file_hit = self._probe_file(candidate) if candidate else None
        index_hit = self._probe_index(candidate)
        if prefer_file:
            return file_hit or index_hit
        return index_hit or file_hit

    def canonical(self, module_id: str) -> str | None:
        """Re-match a stored or externally supplied id to a known module."""
        if module_id in self.known:
            return module_id
        cleaned = module_id[2:] if module_id.startswith("./") else module_id
        return self.match(strip_extension(cleaned.rstrip("/"), self.extensions))

    def _probe_file(self, candidate: str) -> str | None:
        if candidate in self.known:
            return candidate
        for ext in self.extensions:
            if candidate + ext in self.known:
                return candidate + ext
        return None

    def _probe_index(self, candidate: str) -> str | None:
        for name in self.index_names:
            base = posixpath.join(candidate, name) if candidate else name
            if base in self.known:
                return base
            for ext in self.extensions:
                if base + ext in self.known:
                    return base + ext
        return None
