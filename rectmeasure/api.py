"""FastAPI application exposing the measurement session to the dashboard."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from .config import PROJECT_ROOT, Settings
from .drawing import PointerAction, PointerEvent
from .errors import MeasurementValidationError, RecordNotFoundError
from .filtering import DistanceFilter, SortCriterion
from .session import MeasurementSession
from .storage import JSONFileStore

logger = logging.getLogger(__name__)

FRONTEND_BUILD_DIR = PROJECT_ROOT / "dashboard" / ".web"

_session: Optional[MeasurementSession] = None
_session_lock = Lock()


def _find_frontend_index() -> Optional[Path]:
    """Return the bundled Reflex index page if one is available."""

    if not FRONTEND_BUILD_DIR.exists():
        return None

    candidates = [
        FRONTEND_BUILD_DIR / "_static" / "index.html",
        FRONTEND_BUILD_DIR / "pages" / "index.html",
        FRONTEND_BUILD_DIR / "index.html",
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _frontend_fallback_html() -> str:
    """Return a short landing page when the UI build is missing."""

    return """
    <!DOCTYPE html>
    <html lang=\"en\">
      <head>
        <meta charset=\"utf-8\" />
        <title>Measurement Drawing API</title>
        <style>
          body { font-family: system-ui, sans-serif; margin: 3rem auto; max-width: 640px; line-height: 1.6; color: #1f2933; }
          h1 { font-size: 2rem; margin-bottom: 1rem; }
          code { background: #f1f5f9; padding: 0.2rem 0.4rem; border-radius: 0.25rem; }
          a { color: #2563eb; }
        </style>
      </head>
      <body>
        <h1>Measurement drawing backend is running</h1>
        <p>This server keeps the rectangles you draw and the measurements you save. The dashboard is built with Reflex and can be launched separately with <code>reflex run</code>.</p>
        <p>To explore the API directly, open the <a href=\"/docs\">OpenAPI documentation</a>.</p>
      </body>
    </html>
    """


def _serve_frontend_index() -> HTMLResponse | FileResponse:
    frontend_index = _find_frontend_index()
    if frontend_index and frontend_index.is_file():
        return FileResponse(frontend_index)

    return HTMLResponse(content=_frontend_fallback_html(), status_code=200)


def get_session() -> MeasurementSession:
    """Return the process-wide session, loading saved records on first use."""

    global _session
    with _session_lock:
        if _session is None:
            settings = Settings.from_env()
            _session = MeasurementSession.open(JSONFileStore(settings.store_path), settings.records_slot)
            logger.info("Measurement store at %s", settings.store_path)
        return _session


class PointerPayload(BaseModel):
    action: PointerAction
    x: float = Field(0.0, description="Horizontal offset from the drawing surface origin.")
    y: float = Field(0.0, description="Vertical offset from the drawing surface origin.")


class ShortcutPayload(BaseModel):
    key: str = Field(..., min_length=1)
    ctrl: bool = False
    meta: bool = False
    shift: bool = False


class SortPayload(BaseModel):
    criterion: SortCriterion


class FilterPayload(BaseModel):
    predicate: DistanceFilter


class SaveResponse(BaseModel):
    record: dict[str, Any]
    view: dict[str, Any]


app = FastAPI(title="Measurement Drawing Backend", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATIC_MOUNT_CANDIDATES: list[tuple[str, Path]] = [
    ("/_next", FRONTEND_BUILD_DIR / "_next"),
    ("/static", FRONTEND_BUILD_DIR / "static"),
    ("/assets", FRONTEND_BUILD_DIR / "assets"),
    ("/public", FRONTEND_BUILD_DIR / "public"),
    ("/_static", FRONTEND_BUILD_DIR / "_static"),
]

for mount_path, directory in _STATIC_MOUNT_CANDIDATES:
    if directory.is_dir():
        app.mount(mount_path, StaticFiles(directory=str(directory)), name=f"frontend-{mount_path.strip('/')}")


@app.get("/state")
def get_state(session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        return session.view()


@app.post("/pointer")
def pointer(payload: PointerPayload, session: MeasurementSession = Depends(get_session)) -> dict:
    """Feed one pointer event to the drawing state machine."""

    with _session_lock:
        session.handle_pointer(PointerEvent(payload.action, payload.x, payload.y))
        return session.view()


@app.post("/shortcut")
def shortcut(payload: ShortcutPayload, session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        session.handle_key(payload.key, ctrl=payload.ctrl, meta=payload.meta, shift=payload.shift)
        return session.view()


@app.post("/clear")
def clear(session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        session.clear()
        return session.view()


@app.post("/undo")
def undo(session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        session.undo()
        return session.view()


@app.post("/redo")
def redo(session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        session.redo()
        return session.view()


@app.post("/save", response_model=SaveResponse)
def save(session: MeasurementSession = Depends(get_session)):
    """Save the two drawn rectangles as a measurement record."""

    with _session_lock:
        record = session.save()
        return SaveResponse(record=record.to_storage(), view=session.view())


@app.post("/records/sort")
def sort_records(payload: SortPayload, session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        session.sort(payload.criterion)
        return session.view()


@app.post("/records/filter")
def filter_records(payload: FilterPayload, session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        session.filter(payload.predicate)
        return session.view()


@app.get("/records/{record_id}")
def get_record(record_id: str, session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        return session.records.get(record_id).to_storage()


@app.delete("/records/{record_id}")
def delete_record(record_id: str, session: MeasurementSession = Depends(get_session)) -> dict:
    with _session_lock:
        session.delete_record(record_id)
        return session.view()


@app.post("/records/{record_id}/select")
def select_record(record_id: str, session: MeasurementSession = Depends(get_session)) -> dict:
    """Show a saved pair on the drawing surface."""

    with _session_lock:
        session.select_record(record_id)
        return session.view()


@app.get("/", include_in_schema=False, response_model=None)
def serve_frontend_root() -> HTMLResponse | FileResponse:
    """Serve the bundled Reflex dashboard or a short welcome page."""

    return _serve_frontend_index()


@app.exception_handler(MeasurementValidationError)
async def _validation_error_handler(request: Request, exc: MeasurementValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(RecordNotFoundError)
async def _not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(HTTPException)
async def _http_exception_handler(request: Request, exc: HTTPException):
    """Fall back to the dashboard page when the root path returns 404."""

    if (
        exc.status_code == status.HTTP_404_NOT_FOUND
        and request.method in {"GET", "HEAD"}
        and request.url.path in {"", "/", "/index.html"}
    ):
        return _serve_frontend_index()

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
