"""FastAPI application wiring for the tachograph viewer."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response

from src.tachoview.config import Settings
from src.tachoview.logs import configure_logging
from src.tachoview.ui.routes import export_router
from src.tachoview.ui.server import router as ui_router
from src.tachoview.ui.state import ViewerState, create_viewer


def health() -> JSONResponse:
    """Simple liveness endpoint used by deployment probes."""

    return JSONResponse({"status": "ok"})


def favicon() -> Response:
    """Return an empty favicon response to silence 404 noise."""

    return Response(status_code=204)


def create_app(viewer: ViewerState | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    application = FastAPI(title="Tachograph Viewer")
    # One viewer per process: the record on screen lives in app state.
    application.state.viewer = viewer or create_viewer(settings)

    application.add_api_route("/health", health, methods=["GET"])
    application.add_api_route("/favicon.ico", favicon, methods=["GET"], include_in_schema=False)

    # Register UI routes (viewer page, upload, navigation).
    application.include_router(ui_router)

    # Download endpoints.
    application.include_router(export_router)
    return application


app = create_app()


__all__ = ["app", "create_app", "health"]
