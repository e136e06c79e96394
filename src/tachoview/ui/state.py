"""Viewer state shared by the web routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from fastapi import Request

from src.tachoview.config import Settings, load_callable
from src.tachoview.data.ingestion import RecordReader
from src.tachoview.data.schemas import GenerationTag
from src.tachoview.navigation import RecordingSink, ViewerEngine
from src.tachoview.verification.dispatcher import Scheduler, Verifier


@dataclass(slots=True)
class ViewerState:
    engine: ViewerEngine
    sink: RecordingSink
    reader: RecordReader


def create_viewer(
    settings: Settings | None = None,
    *,
    verifier: Verifier | None = None,
    public_keys: Mapping[GenerationTag, bytes | None] | None = None,
    scheduler: Scheduler | None = None,
) -> ViewerState:
    """Wire engine, sink and reader from ``settings`` (environment by default)."""

    settings = settings or Settings.from_env()
    if verifier is None and settings.verifier:
        verifier = load_callable(settings.verifier)
    sink = RecordingSink()
    engine = ViewerEngine(
        sink,
        verifier=verifier,
        public_keys=public_keys,
        scheduler=scheduler,
        settings=settings,
    )
    return ViewerState(engine=engine, sink=sink, reader=RecordReader.from_settings(settings))


def get_viewer(request: Request) -> ViewerState:
    return request.app.state.viewer


__all__ = ["ViewerState", "create_viewer", "get_viewer"]
