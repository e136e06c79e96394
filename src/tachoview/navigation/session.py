"""In-memory state of the record currently on screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.tachoview.catalog.menu import RenderInstruction
from src.tachoview.data.schemas import CardBlocks, TachographRecord


@dataclass(slots=True, frozen=True)
class SelectionState:
    key: str
    generation_tag: str
    data: Any


@dataclass(slots=True)
class SessionState:
    """Loaded record, its typed view and the current selection.

    ``version`` increases on every load so deferred work can tell whether
    it still refers to the record on screen.
    """

    file_name: str | None = None
    record: Any = None
    view: TachographRecord | None = None
    blocks: CardBlocks | None = None
    menu: tuple[RenderInstruction, ...] = ()
    selection: SelectionState | None = None
    version: int = 0

    def reset(
        self,
        record: Any,
        file_name: str | None,
        *,
        view: TachographRecord | None = None,
        blocks: CardBlocks | None = None,
        menu: tuple[RenderInstruction, ...] = (),
    ) -> int:
        self.version += 1
        self.file_name = file_name
        self.record = record
        self.view = view
        self.blocks = blocks
        self.menu = menu
        self.selection = None
        return self.version

    @property
    def has_record(self) -> bool:
        return self.record is not None

    @property
    def has_selection(self) -> bool:
        return self.selection is not None


__all__ = ["SelectionState", "SessionState"]
