"""FastAPI routes for the deadwood API."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from deadwood.cleaner import delete_modules, generate_deletion_script
from deadwood.config import load_config
from deadwood.errors import ConfigError, ReportNotFoundError, UnsafePathError
from deadwood.exporter import build_report_document, load_report, write_report
from deadwood.pipeline import run_analysis
from deadwood.web.state import state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# --- Request models ---

class AnalysisRequest(BaseModel):
    target_dir: str | None = None

class DeleteFileRequest(BaseModel):
    file_path: str

class DeleteFilesRequest(BaseModel):
    file_paths: list[str]

class ScriptRequest(BaseModel):
    file_paths: list[str]

class TargetDirectoryRequest(BaseModel):
    target_dir: str


# --- Helpers ---

def _validate_dir(p: str) -> Path:
    resolved = Path(p).expanduser().resolve()
    if not resolved.is_dir():
        raise HTTPException(404, f"Target directory not found: {resolved}")
    return resolved


def _analyze(target: Path) -> dict:
    config = load_config(target)
    report = run_analysis(config)
    write_report(report, config.report_path, target)
    state.record(target, report)
    return report.summary()


# --- Endpoints ---

@router.get("/analysis")
async def get_analysis():
    """Return the latest report for the current target directory.

    A report produced by this server is served from memory; otherwise the
    one saved on disk by an earlier run is loaded.
    """
    if state.last_report is not None:
        document = build_report_document(state.last_report, state.target_dir)
        document["generated"] = state.last_run
        return document
    try:
        return load_report(state.config().report_path)
    except ReportNotFoundError as e:
        raise HTTPException(404, str(e))
    except ConfigError as e:
        raise HTTPException(400, str(e))


@router.post("/analysis")
async def post_analysis(req: AnalysisRequest | None = None):
    """Run a fresh analysis and save the report."""
    target = _validate_dir(req.target_dir) if req and req.target_dir else state.target_dir
    if not target.is_dir():
        raise HTTPException(404, f"Target directory not found: {target}")
    try:
        summary = await asyncio.to_thread(_analyze, target)
    except ConfigError as e:
        raise HTTPException(400, str(e))
    return {
        "success": True,
        "message": "Analysis completed",
        "target_dir": str(target),
        "summary": summary,
    }


@router.delete("/delete-file")
async def delete_file(req: DeleteFileRequest):
    try:
        [result] = delete_modules(state.target_dir, [req.file_path])
    except UnsafePathError as e:
        raise HTTPException(403, str(e))
    if not result.success:
        raise HTTPException(404, f"File not found: {req.file_path}")
    return {"success": True, "message": f"Deleted {req.file_path}", "files": result.deleted_files}


@router.delete("/delete-files")
async def delete_files(req: DeleteFilesRequest):
    try:
        results = delete_modules(state.target_dir, req.file_paths)
    except UnsafePathError as e:
        raise HTTPException(403, str(e))
    return {"results": [r.to_dict() for r in results]}


@router.post("/generate-script", response_class=PlainTextResponse)
async def generate_script(req: ScriptRequest):
    try:
        return generate_deletion_script(state.target_dir, req.file_paths)
    except UnsafePathError as e:
        raise HTTPException(403, str(e))


@router.get("/target-directory")
async def get_target_directory():
    return {"target_dir": str(state.target_dir), "last_run": state.last_run}


@router.post("/target-directory")
async def set_target_directory(req: TargetDirectoryRequest):
    target = _validate_dir(req.target_dir)
    state.reset(target)
    logger.info("Target directory set to %s", target)
    return {"success": True, "message": "Target directory updated", "target_dir": str(target)}
