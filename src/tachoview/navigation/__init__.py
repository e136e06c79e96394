"""Session handling, selection and the viewer engine."""

from .session import SelectionState, SessionState
from .resolver import resolve
from .sink import ExportButton, NullSink, RecordingSink, ViewSink
from .engine import ViewerEngine

__all__ = [
    "ExportButton",
    "NullSink",
    "RecordingSink",
    "SelectionState",
    "SessionState",
    "ViewSink",
    "ViewerEngine",
    "resolve",
]
