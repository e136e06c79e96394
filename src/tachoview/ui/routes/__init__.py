"""Reusable UI route modules."""

from __future__ import annotations

from .export import router as export_router

__all__ = ["export_router"]
