"""Rendering sinks the engine reports to."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Dict, List, Protocol

from src.tachoview.catalog.menu import RenderInstruction
from src.tachoview.verification.dispatcher import VerificationOutcome


class ExportButton(str, Enum):
    ALL = "export_all"
    SELECTED = "export_selected"


class ViewSink(Protocol):
    """What a renderer has to provide to drive the viewer."""

    def reset(self) -> None: ...

    def render_entry(self, instruction: RenderInstruction) -> None: ...

    def render_content(self, text: str) -> None: ...

    def set_button_enabled(self, button: ExportButton, enabled: bool) -> None: ...

    def verification_result(self, outcome: VerificationOutcome) -> None: ...


class NullSink:
    """Headless sink that drops every call."""

    def reset(self) -> None:
        return None

    def render_entry(self, instruction: RenderInstruction) -> None:
        return None

    def render_content(self, text: str) -> None:
        return None

    def set_button_enabled(self, button: ExportButton, enabled: bool) -> None:
        return None

    def verification_result(self, outcome: VerificationOutcome) -> None:
        return None


class RecordingSink:
    """Keeps the last rendered state in memory.

    Verification results arrive from worker threads and are guarded by a lock.
    """

    def __init__(self) -> None:
        self.entries: List[RenderInstruction] = []
        self.content: str | None = None
        self.buttons: Dict[ExportButton, bool] = {button: False for button in ExportButton}
        self._outcomes: List[VerificationOutcome] = []
        self._lock = threading.Lock()

    def reset(self) -> None:
        self.entries = []
        self.content = None
        with self._lock:
            self._outcomes = []

    def render_entry(self, instruction: RenderInstruction) -> None:
        self.entries.append(instruction)

    def render_content(self, text: str) -> None:
        self.content = text

    def set_button_enabled(self, button: ExportButton, enabled: bool) -> None:
        self.buttons[button] = enabled

    def verification_result(self, outcome: VerificationOutcome) -> None:
        with self._lock:
            self._outcomes.append(outcome)

    @property
    def outcomes(self) -> List[VerificationOutcome]:
        with self._lock:
            return list(self._outcomes)


__all__ = ["ExportButton", "NullSink", "RecordingSink", "ViewSink"]
