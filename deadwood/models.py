"""Data models for the deadwood analysis."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from pathlib import Path

# Recognized source extensions, in the order backing files are probed
SOURCE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")

DEFAULT_SKIP_DIRS: tuple[str, ...] = (
    "node_modules", "dist", ".git", "build", ".next", "coverage",
)

# Substrings that mark test/story/type-declaration/config files
DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "__tests__", ".test.", ".spec.", ".stories.", "setupTests", ".d.ts", ".config.",
)

DEFAULT_ENTRY_NAMES: tuple[str, ...] = ("index", "App", "main", "server", "app")
DEFAULT_ENTRY_DIRS: tuple[str, ...] = ("api", "routes")
DEFAULT_REPORT_FILE = "deadwood-report.json"

Chain = tuple[str, ...]


class Classification(enum.Enum):
    ORPHANED = "orphaned"
    FALSE_POSITIVE = "false_positive"
    TRANSITIVE_DEAD = "transitive_dead"


@dataclass(frozen=True)
class ModuleRecord:
    """Extraction result for one module."""
    module_id: str
    direct_specifiers: tuple[str, ...] = ()
    reexport_specifiers: tuple[str, ...] = ()
    has_dynamic_import: bool = False
    read_error: str | None = None


@dataclass
class GraphStats:
    module_count: int = 0
    barrel_count: int = 0
    barrel_edges_added: int = 0
    unresolved_specifiers: int = 0


@dataclass(frozen=True)
class ChainAnalysis:
    """Why one unreachable module is unreachable."""
    module_id: str
    classification: Classification
    chains: tuple[Chain, ...] = ()
    imported_by: tuple[str, ...] = ()
    reachable_roots: tuple[str, ...] = ()
    cycles: tuple[Chain, ...] = ()
    max_depth: int = 0
    truncated: bool = False
    summary: str = ""

    @property
    def is_orphaned(self) -> bool:
        return self.classification is Classification.ORPHANED

    def to_dict(self) -> dict:
        roots = set(self.reachable_roots)
        chains = []
        for chain in self.chains:
            root = chain[-1]
            if root in roots:
                reason = "Root is reachable (possible resolution mismatch)"
            elif len(chain) == 1:
                reason = "Orphaned module"
            else:
                reason = "Entire chain unreachable"
            chains.append({
                "path": list(chain),
                "root": root,
                "root_reachable": root in roots,
                "length": len(chain),
                "reason": reason,
            })
        return {
            "module_id": self.module_id,
            "classification": self.classification.value,
            "is_orphaned": self.is_orphaned,
            "summary": self.summary,
            "imported_by": list(self.imported_by),
            "max_depth": self.max_depth,
            "truncated": self.truncated,
            "chains": chains,
            "cycles": [list(c) for c in self.cycles],
        }


@dataclass
class AnalysisReport:
    """Result of one analysis run."""
    total_modules: int
    reachable: frozenset[str]
    unreachable: tuple[str, ...]
    entry_points: tuple[str, ...]
    chain_analysis: dict[str, ChainAnalysis] = field(default_factory=dict)
    dynamic_import_modules: tuple[str, ...] = ()
    unresolved_entry_points: tuple[str, ...] = ()
    graph_stats: GraphStats = field(default_factory=GraphStats)

    def by_classification(self) -> dict[Classification, list[str]]:
        buckets: dict[Classification, list[str]] = {c: [] for c in Classification}
        for module_id in self.unreachable:
            buckets[self.chain_analysis[module_id].classification].append(module_id)
        return buckets

    def summary(self) -> dict[str, int]:
        counts = {
            "total": self.total_modules,
            "reachable": len(self.reachable),
            "unreachable": len(self.unreachable),
        }
        for cls, ids in self.by_classification().items():
            counts[cls.value] = len(ids)
        counts["dynamic_imports"] = len(self.dynamic_import_modules)
        return counts

    def to_dict(self) -> dict:
        return {
            "total_modules": self.total_modules,
            "reachable": sorted(self.reachable),
            "unreachable": list(self.unreachable),
            "entry_points": list(self.entry_points),
            "unresolved_entry_points": list(self.unresolved_entry_points),
            "chain_analysis": {
                module_id: record.to_dict()
                for module_id, record in self.chain_analysis.items()
            },
            "dynamic_import_modules": list(self.dynamic_import_modules),
            "graph_stats": asdict(self.graph_stats),
            "summary": self.summary(),
        }


@dataclass
class AnalysisConfig:
    """Configuration for one analysis run."""
    target_dir: Path = field(default_factory=lambda: Path("."))
    output_file: str = DEFAULT_REPORT_FILE
    extensions: tuple[str, ...] = SOURCE_EXTENSIONS
    skip_dirs: tuple[str, ...] = DEFAULT_SKIP_DIRS
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    entry_names: tuple[str, ...] = DEFAULT_ENTRY_NAMES
    entry_dirs: tuple[str, ...] = DEFAULT_ENTRY_DIRS
    extra_entry_points: tuple[str, ...] = ()
    barrel_names: tuple[str, ...] = ("index",)
    follow_reexports: bool = False
    max_chains: int | None = 1000
    max_depth: int | None = None
    workers: int = 1

    @property
    def report_path(self) -> Path:
        path = Path(self.output_file)
        if path.is_absolute():
            return path
        return self.target_dir / path
