"""Map a clicked menu entry back to its slice of the loaded record."""

from __future__ import annotations

from typing import Any

from src.tachoview.catalog.parts import find_row
from src.tachoview.data.schemas import GenerationTag
from src.tachoview.navigation.session import SessionState


def resolve(session: SessionState, key: str, generation_tag: GenerationTag | str) -> Any | None:
    """Return the data behind ``(key, generation_tag)`` or ``None`` when not found.

    Card tags read the catalog part ``key`` of the ``gen1`` (or legacy) or
    ``gen2`` block. Any other tag selects the VU transfer items whose
    ``typeId`` equals ``key``; an empty list still counts as found.
    """

    tag = GenerationTag.parse(generation_tag)
    if tag is not None and tag.is_card:
        if session.blocks is None or find_row(tag, key) is None:
            return None
        block = session.blocks.block_for(tag)
        if block is None:
            return None
        return block.part(key)

    view = session.view
    if view is None or view.is_card:
        return None
    return [item for item in view.vu_items if str(item.get("typeId")) == key]


__all__ = ["resolve"]
