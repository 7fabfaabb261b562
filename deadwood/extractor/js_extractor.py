"""JavaScript/TypeScript specifier extraction using regex patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass

# import X from '...', import { a, b } from '...', import type { T } from '...'
_STATIC_IMPORT_RE = re.compile(
    r"""\bimport\s+(?:type\s+)?[\w*${}\s,]*?\s*\bfrom\s*(['"])(?P<spec>[^'"\n]+)\1""",
)
# import './styles'
_SIDE_EFFECT_IMPORT_RE = re.compile(r"""\bimport\s*(['"])(?P<spec>[^'"\n]+)\1""")
# require( or import(, then any inline comments: import(/* webpackChunkName: "x" */ './X')
_CALL_OPEN = r"""\b(?:require|import)\s*\(\s*(?:/\*[\s\S]*?\*/\s*)*"""

# require('...'), import('...')
_CALL_LITERAL_RE = re.compile(
    _CALL_OPEN + r"""(['"])(?P<spec>[^'"\n]+)\1\s*[,)]""",
)
# import(`./static/path`) with no interpolation
_CALL_TEMPLATE_RE = re.compile(
    _CALL_OPEN + r"""`(?P<spec>(?:[^`$\\]|\$(?!\{))*)`\s*[,)]""",
)

# export * from, export * as ns from, export { a } from,
# export { default as A } from, export type { T } from
_REEXPORT_RE = re.compile(
    r"""\bexport\s+(?:type\s+)?(?:\*(?:\s+as\s+[\w$]+)?|\{[^}]*\})\s*from\s*(['"])(?P<spec>[^'"\n]+)\1""",
)

# Targets that cannot be known statically
_DYNAMIC_RES = (
    # import(`./pages/${name}`)
    re.compile(_CALL_OPEN + r"""`[^`]*\$\{"""),
    # import(modulePath), require(getPath())
    re.compile(_CALL_OPEN + r"""(?=[^\s'"`)/])"""),
    # import('./locale/' + lang)
    re.compile(_CALL_OPEN + r"""(['"])[^'"\n]*\1\s*\+"""),
)

_IMPORT_RES = (
    _STATIC_IMPORT_RE,
    _SIDE_EFFECT_IMPORT_RE,
    _CALL_LITERAL_RE,
    _CALL_TEMPLATE_RE,
)


@dataclass(frozen=True)
class ExtractedSpecifiers:
    imports: tuple[str, ...] = ()
    reexports: tuple[str, ...] = ()
    has_dynamic_import: bool = False


def is_relative(specifier: str) -> bool:
    return specifier.startswith(".")


def extract_specifiers(source: str) -> ExtractedSpecifiers:
    """Scan module text for relative import and re-export specifiers."""
    return ExtractedSpecifiers(
        imports=_collect(source, _IMPORT_RES),
        reexports=_collect(source, (_REEXPORT_RE,)),
        has_dynamic_import=any(p.search(source) for p in _DYNAMIC_RES),
    )


def _collect(source: str, patterns: tuple[re.Pattern, ...]) -> tuple[str, ...]:
    """Relative specifiers from all patterns, in source order, deduplicated."""
    hits: list[tuple[int, str]] = []
    for pattern in patterns:
        for m in pattern.finditer(source):
            spec = m.group("spec").strip()
            if is_relative(spec):
                hits.append((m.start(), spec))
    hits.sort(key=lambda h: h[0])

    seen: set[str] = set()
    ordered: list[str] = []
    for _, spec in hits:
        if spec not in seen:
            seen.add(spec)
            ordered.append(spec)
    return tuple(ordered)
