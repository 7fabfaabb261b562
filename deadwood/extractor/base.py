"""Text readers that feed module source to the extractor."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Protocol, Sequence


class TextReader(Protocol):
    def read(self, module_id: str) -> str:
        """Return the source text of *module_id*; raise on failure."""
        ...


class FileSystemReader:
    """Read modules from disk.

    A module id may be backed by several files (``a.ts`` and ``a.js``); their
    texts are joined so the module's specifiers are the union of both.
    """

    def __init__(self, root: Path, paths_by_id: Mapping[str, Sequence[str]]):
        self.root = Path(root)
        self.paths_by_id = paths_by_id

    def read(self, module_id: str) -> str:
        paths = self.paths_by_id.get(module_id)
        if not paths:
            raise FileNotFoundError(f"No source file for module {module_id!r}")
        return "\n".join(self._read_source(self.root / p) for p in paths)

    def _read_source(self, path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")


class DictReader:
    """In-memory reader, used for programmatic analysis and tests."""

    def __init__(self, sources: Mapping[str, str]):
        self.sources = sources

    def read(self, module_id: str) -> str:
        try:
            return self.sources[module_id]
        except KeyError:
            raise FileNotFoundError(f"No source for module {module_id!r}") from None
