"""In-memory state for the API server."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from deadwood.config import load_config
from deadwood.models import AnalysisConfig, AnalysisReport


class AppState:
    """Singleton in-memory state shared by all API routes."""

    def __init__(self, target_dir: Path | None = None):
        self.target_dir: Path = (target_dir or Path(".")).resolve()
        self.last_report: AnalysisReport | None = None
        self.last_run: str | None = None

    def reset(self, target_dir: Path) -> None:
        self.target_dir = Path(target_dir).resolve()
        self.last_report = None
        self.last_run = None

    def config(self) -> AnalysisConfig:
        return load_config(self.target_dir)

    def record(self, target_dir: Path, report: AnalysisReport) -> None:
        self.target_dir = target_dir
        self.last_report = report
        self.last_run = datetime.now().isoformat()


state = AppState()
