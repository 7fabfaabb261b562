"""Pipeline orchestrator: scan -> extract -> discover entries -> analyze."""

from __future__ import annotations

import logging
from typing import Callable

from deadwood.analysis import DependencyGraphBuilder, detect_dead_code
from deadwood.extractor import FileSystemReader, extract_modules
from deadwood.models import AnalysisConfig, AnalysisReport
from deadwood.scanner import SourceScanner, discover_entry_points

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def run_analysis(
    config: AnalysisConfig,
    progress: ProgressCallback | None = None,
) -> AnalysisReport:
    """Analyze the project at ``config.target_dir``."""
    root = config.target_dir

    # Stage 1: Scan
    if progress:
        progress("Scanning", 0, 1)
    scanner = SourceScanner(config.extensions, config.skip_dirs, config.exclude_patterns)
    paths = scanner.scan(root)
    by_module = scanner.group_by_module(paths)
    if progress:
        progress("Scanning", 1, 1)
    logger.info("Found %d source files (%d modules) under %s", len(paths), len(by_module), root)

    # Stage 2: Extract
    if progress:
        progress("Extracting", 0, len(by_module))
    reader = FileSystemReader(root, by_module)
    records = extract_modules(list(by_module), reader, workers=config.workers)
    if progress:
        progress("Extracting", len(by_module), len(by_module))

    # Stage 3: Entry points
    entry_points = discover_entry_points(
        root,
        paths,
        entry_names=config.entry_names,
        entry_dirs=config.entry_dirs,
        extra=config.extra_entry_points,
        extensions=config.extensions,
    )
    logger.info("Using %d entry points", len(entry_points))

    # Stage 4: Reachability and chain analysis
    if progress:
        progress("Analyzing", 0, 1)
    builder = DependencyGraphBuilder(
        extensions=config.extensions,
        barrel_names=config.barrel_names,
        follow_reexports=config.follow_reexports,
    )
    report = detect_dead_code(
        records,
        entry_points,
        builder=builder,
        max_chains=config.max_chains,
        max_depth=config.max_depth,
    )
    if progress:
        progress("Analyzing", 1, 1)
    return report
