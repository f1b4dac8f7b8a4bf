"""FastAPI application that exposes a local web UI and API for the time logger."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict

from .config import TrackerSettings
from .engine import InvalidActivityName, TimerState
from .exporting import default_export_filename
from .models import TimeEntry
from .session import TrackerSession

logger = logging.getLogger(__name__)


class StartPayload(BaseModel):
    activity_name: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class ActivityPayload(BaseModel):
    activity_name: str

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    settings: Optional[TrackerSettings] = None,
    session: Optional[TrackerSession] = None,
) -> FastAPI:
    """Instantiate the FastAPI application around a single tracking session."""
    resolved_settings = settings or TrackerSettings()
    tracker = session or TrackerSession.from_settings(resolved_settings)

    app = FastAPI(title="Time Logger", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.session = tracker

    static_dir = Path(__file__).parent / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    @app.on_event("startup")
    async def _startup() -> None:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        tracker.close()

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        return _state_payload(request.app.state.session.engine.snapshot())

    @app.put("/api/activity")
    def set_activity(payload: ActivityPayload, request: Request) -> Dict[str, Any]:
        engine = request.app.state.session.engine
        engine.activity_name = payload.activity_name
        return _state_payload(engine.snapshot())

    @app.post("/api/start")
    def start(request: Request, payload: Optional[StartPayload] = None) -> Dict[str, Any]:
        current: TrackerSession = request.app.state.session
        name = payload.activity_name if payload else None
        try:
            current.start(name)
        except InvalidActivityName as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _state_payload(current.engine.snapshot())

    @app.post("/api/stop")
    def stop(request: Request) -> Dict[str, Any]:
        current: TrackerSession = request.app.state.session
        entry = current.stop()
        return {
            "entry": _entry_payload(entry) if entry else None,
            "status": _state_payload(current.engine.snapshot()),
        }

    @app.get("/api/entries")
    def entries(request: Request) -> Dict[str, Any]:
        log = request.app.state.session.log
        return {
            "entries": [_entry_payload(entry) for entry in log],
            "total_seconds": log.total_seconds(),
            "formatted_total": log.formatted_total(),
        }

    @app.delete("/api/entries/{entry_id}", status_code=204)
    def delete_entry(entry_id: str, request: Request) -> Response:
        request.app.state.session.delete_entry(entry_id)
        return Response(status_code=204)

    @app.delete("/api/entries", status_code=204)
    def clear_entries(request: Request) -> Response:
        request.app.state.session.clear()
        return Response(status_code=204)

    @app.get("/api/export")
    def export(request: Request) -> JSONResponse:
        filename = default_export_filename()
        return JSONResponse(
            content=request.app.state.session.export(),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/")
    def index(request: Request):
        index_path = (Path(__file__).parent / "static" / "index.html").resolve()
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="UI not found")
        return FileResponse(index_path)

    return app


def _state_payload(state: TimerState) -> Dict[str, Any]:
    return {
        "is_running": state.is_running,
        "activity_name": state.activity_name,
        "started_at": state.started_at.isoformat() if state.started_at else None,
        "elapsed_seconds": state.elapsed_seconds,
        "elapsed_display": state.elapsed_display,
    }


def _entry_payload(entry: TimeEntry) -> Dict[str, Any]:
    return {
        "id": str(entry.id),
        "name": entry.name,
        "duration_seconds": entry.duration_seconds,
        "formatted": entry.formatted_time,
    }
