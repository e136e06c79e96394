"""Presence scanning of card generation blocks."""

from __future__ import annotations

from typing import Iterable

from src.tachoview.catalog.parts import CatalogRow
from src.tachoview.data.schemas import CardGenBlock


def scan(block: CardGenBlock | None, rows: Iterable[CatalogRow]) -> tuple[CatalogRow, ...]:
    """Return the ``rows`` whose key holds a non-null value on ``block``.

    Output order follows ``rows``; a missing block yields nothing.
    """

    if block is None:
        return ()
    return tuple(row for row in rows if block.has_part(row.key))


__all__ = ["scan"]
