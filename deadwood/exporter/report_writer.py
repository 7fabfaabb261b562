"""Write and read the JSON analysis report."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from deadwood.errors import ReportNotFoundError
from deadwood.models import AnalysisReport

logger = logging.getLogger(__name__)

REPORT_VERSION = "1.0"


def build_report_document(report: AnalysisReport, target_dir: Path) -> dict[str, Any]:
    """Wrap the report body with run metadata."""
    document: dict[str, Any] = {
        "version": REPORT_VERSION,
        "generated": datetime.now().isoformat(),
        "target_directory": str(target_dir),
    }
    document.update(report.to_dict())
    return document


def write_report(report: AnalysisReport, path: Path, target_dir: Path) -> Path:
    """Save *report* as pretty JSON at *path*."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(build_report_document(report, target_dir), indent=2) + "\n",
        encoding="utf-8",
    )
    logger.info("Report saved to %s", path)
    return path


def load_report(path: Path) -> dict[str, Any]:
    path = Path(path)
    if not path.is_file():
        raise ReportNotFoundError(f"No analysis report at {path}; run an analysis first")
    return json.loads(path.read_text(encoding="utf-8"))
