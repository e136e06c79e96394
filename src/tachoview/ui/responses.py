"""Helpers for producing canonical JSON payloads for UI responses."""

from __future__ import annotations

from typing import Any, Dict

from fastapi.responses import JSONResponse

from src.tachoview.ui.state import ViewerState

__all__ = ["make_viewer_payload", "respond_success"]


def make_viewer_payload(viewer: ViewerState, *, include_content: bool = True) -> Dict[str, Any]:
    """Return a JSON-serialisable snapshot of what the viewer currently shows."""

    engine = viewer.engine
    session = engine.session
    selection = session.selection

    payload: Dict[str, Any] = {
        "file_name": session.file_name,
        "record_version": session.version,
        "menu": [item.as_payload() for item in session.menu],
        "selection": (
            {"key": selection.key, "generationTag": selection.generation_tag}
            if selection is not None
            else None
        ),
        "exports": {
            "all": engine.can_export_all,
            "selected": engine.can_export_selected,
        },
        "verification": [
            outcome.as_payload()
            for outcome in viewer.sink.outcomes
            if outcome.record_version == session.version
        ],
    }
    if include_content:
        payload["content"] = viewer.sink.content
    return payload


def respond_success(payload: Dict[str, Any]) -> JSONResponse:
    """Wrap the payload in the canonical API response envelope."""

    return JSONResponse(status_code=200, content={"results_payload": payload})
