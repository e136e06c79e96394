"""FastAPI application entrypoint for the tachograph viewer."""

from __future__ import annotations

from src.tachoview.api.main import app, create_app, health

__all__ = ["app", "create_app", "health"]
