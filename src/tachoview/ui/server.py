"""Viewer UI routes: upload, menu navigation and verification status.

Handlers are ``async`` so every session access happens on the event loop
thread, and deferred verification is queued behind the running request.
"""

from __future__ import annotations

import pathlib

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status
from fastapi.responses import RedirectResponse
from starlette.templating import Jinja2Templates

from src.tachoview.data.ingestion import RecordDecodeError
from src.tachoview.ui.responses import make_viewer_payload, respond_success
from src.tachoview.ui.state import get_viewer

router = APIRouter()
templates = Jinja2Templates(directory=str(pathlib.Path(__file__).resolve().parent / "templates"))


async def _read_upload(upload: UploadFile) -> bytes:
    data = await upload.read()
    await upload.seek(0)
    return data or b""


def _wants_json(request: Request) -> bool:
    accept = (request.headers.get("accept") or "").lower()
    return "application/json" in accept


@router.get("/", include_in_schema=False)
async def index(request: Request, key: str | None = None, gen: str | None = None):
    viewer = get_viewer(request)
    if key and gen:
        viewer.engine.on_select(key, gen)
    return templates.TemplateResponse(
        request,
        "viewer.html",
        {"viewer": make_viewer_payload(viewer)},
    )


@router.post("/records")
async def upload_record(request: Request, record_file: UploadFile = File(...)):
    """Parse the uploaded download and make it the current record."""

    viewer = get_viewer(request)
    data = await _read_upload(record_file)
    try:
        record = viewer.reader.from_bytes(data)
    except RecordDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc

    viewer.engine.load_record(record, record_file.filename)
    if not _wants_json(request):
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    return respond_success(make_viewer_payload(viewer))


@router.get("/records/menu")
async def record_menu(request: Request):
    viewer = get_viewer(request)
    return respond_success(make_viewer_payload(viewer, include_content=False))


@router.get("/records/parts/{generation_tag}/{key}")
async def record_part(request: Request, generation_tag: str, key: str):
    """Select a menu entry and return the rendered part."""

    viewer = get_viewer(request)
    if not viewer.engine.session.has_record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No record loaded")
    data = viewer.engine.on_select(key, generation_tag)
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Part not found")
    return respond_success(make_viewer_payload(viewer))


@router.get("/records/verification")
async def record_verification(request: Request):
    viewer = get_viewer(request)
    payload = make_viewer_payload(viewer, include_content=False)
    return respond_success(
        {
            "record_version": payload["record_version"],
            "verification": payload["verification"],
        }
    )


__all__ = ["router"]
