"""Source file discovery."""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable

from deadwood.analysis.resolver import strip_extension
from deadwood.models import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_SKIP_DIRS, SOURCE_EXTENSIONS


class SourceScanner:
    """Find analyzable JS/TS modules under a directory."""

    def __init__(
        self,
        extensions: tuple[str, ...] = SOURCE_EXTENSIONS,
        skip_dirs: Iterable[str] | None = None,
        exclude_patterns: Iterable[str] | None = None,
    ):
        self.extensions = extensions
        self.skip_dirs = list(DEFAULT_SKIP_DIRS if skip_dirs is None else skip_dirs)
        self.exclude_patterns = list(
            DEFAULT_EXCLUDE_PATTERNS if exclude_patterns is None else exclude_patterns
        )

    def scan(self, directory: Path) -> list[str]:
        """Return POSIX paths relative to *directory*, sorted."""
        directory = Path(directory)
        found: list[str] = []
        for path in sorted(directory.rglob("*")):
            if path.is_dir():
                continue
            rel = path.relative_to(directory)
            if self._should_skip(rel):
                continue
            rel_posix = rel.as_posix()
            if not rel_posix.endswith(self.extensions):
                continue
            if self.is_excluded(rel_posix):
                continue
            found.append(rel_posix)
        return found

    def is_excluded(self, rel_path: str) -> bool:
        """Test/spec/story/type-declaration/config files are not analyzed."""
        return any(pattern in rel_path for pattern in self.exclude_patterns)

    def module_id_for(self, rel_path: str) -> str:
        return strip_extension(rel_path, self.extensions)

    def group_by_module(self, paths: Iterable[str]) -> dict[str, list[str]]:
        """Map module ids to their backing files, in first-seen order."""
        grouped: dict[str, list[str]] = {}
        for rel_path in paths:
            grouped.setdefault(self.module_id_for(rel_path), []).append(rel_path)
        return grouped

    def _should_skip(self, rel: Path) -> bool:
        for part in rel.parts[:-1]:
            for pattern in self.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
