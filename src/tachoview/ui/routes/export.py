"""Export routes returning JSON, CSV and ZIP downloads."""

from __future__ import annotations

import io

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import StreamingResponse

from src.tachoview.catalog.frame import catalog_csv
from src.tachoview.reporting.archive import build_record_archive
from src.tachoview.reporting.export import ExportDocument, export_file_name
from src.tachoview.ui.state import get_viewer

router = APIRouter(prefix="/export")


def _download(blob: bytes, media_type: str, file_name: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(blob),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


def _document_response(document: ExportDocument | None) -> Response:
    # Exports are gated by the UI; a request without data is a no-op.
    if document is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return _download(document.content, document.media_type, document.file_name)


@router.get("/all", include_in_schema=False)
async def export_all(request: Request) -> Response:
    return _document_response(get_viewer(request).engine.export_all())


@router.get("/selected", include_in_schema=False)
async def export_selected(request: Request) -> Response:
    return _document_response(get_viewer(request).engine.export_selected())


@router.get("/catalog.csv", include_in_schema=False)
async def export_catalog(request: Request) -> Response:
    session = get_viewer(request).engine.session
    if not session.has_record:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    file_name = export_file_name(session.file_name, "catalog", ".csv")
    return _download(catalog_csv(session.menu).encode("utf-8"), "text/csv", file_name)


@router.get("/archive", include_in_schema=False)
async def export_archive(request: Request) -> Response:
    viewer = get_viewer(request)
    blob = build_record_archive(viewer.engine)
    if blob is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    file_name = export_file_name(viewer.engine.session.file_name, "parts", ".zip")
    return _download(blob, "application/zip", file_name)


__all__ = ["router"]
