"""FastAPI application factory."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI

from deadwood import __version__
from deadwood.config import default_target_dir
from deadwood.web.api import router
from deadwood.web.state import state


def create_app(target_dir: Path | None = None) -> FastAPI:
    app = FastAPI(title="deadwood", version=__version__)
    state.reset(target_dir or default_target_dir())
    app.include_router(router)
    return app
