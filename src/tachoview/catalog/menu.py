"""Build the ordered navigation menu for a loaded record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Union

from src.tachoview.catalog.parts import IDENTIFICATION_ROWS, PartGroup, rows_for
from src.tachoview.catalog.presence import scan
from src.tachoview.data.schemas import (
    CARD_DATA_TYPE,
    CardBlocks,
    GenerationTag,
    TachographRecord,
)

logger = logging.getLogger(__name__)

GENERATION_HEADERS: Dict[GenerationTag, str] = {
    GenerationTag.GEN1: "Card Generation 1",
    GenerationTag.GEN2: "Card Generation 2",
}


class InstructionKind(str, Enum):
    HEADER = "header"
    ENTRY = "entry"
    DIVIDER = "divider"


@dataclass(slots=True, frozen=True)
class MenuHeader:
    """Non-selectable section label."""

    title: str
    kind: ClassVar[InstructionKind] = InstructionKind.HEADER

    def as_payload(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "title": self.title}


@dataclass(slots=True, frozen=True)
class MenuEntry:
    """Selectable catalog item; ``(key, generation_tag)`` routes the click."""

    title: str
    key: str
    generation_tag: str
    kind: ClassVar[InstructionKind] = InstructionKind.ENTRY

    def as_payload(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "key": self.key,
            "generationTag": self.generation_tag,
        }


@dataclass(slots=True, frozen=True)
class MenuDivider:
    kind: ClassVar[InstructionKind] = InstructionKind.DIVIDER

    def as_payload(self) -> Dict[str, Any]:
        return {"kind": self.kind.value}


RenderInstruction = Union[MenuHeader, MenuEntry, MenuDivider]


def _identification_tag(blocks: CardBlocks) -> GenerationTag | None:
    root = blocks.root
    if root is None:
        return None
    declared = root.generation_tag
    if declared is not None and declared.is_card and blocks.block_for(declared) is not None:
        return declared
    return blocks.root_tag


def _card_menu(blocks: CardBlocks) -> list[RenderInstruction]:
    root = blocks.root
    if root is None:
        return []

    items: list[RenderInstruction] = [MenuHeader(root.type_of_tachograph_card_id or CARD_DATA_TYPE)]
    tag = _identification_tag(blocks)
    for row in scan(root, IDENTIFICATION_ROWS):
        items.append(MenuEntry(row.label, row.key, tag.value))
    items.append(MenuDivider())

    for generation, block in blocks.present():
        if not (blocks.legacy and generation is GenerationTag.GEN1):
            items.append(MenuHeader(GENERATION_HEADERS[generation]))
        for row in scan(block, rows_for(generation, PartGroup.SECTION)):
            items.append(MenuEntry(row.label, row.key, generation.value))
    return items


def _vu_menu(record: TachographRecord) -> list[RenderInstruction]:
    tag = GenerationTag.for_vu(record.header.generation)
    items: list[RenderInstruction] = [MenuHeader(tag.value)]
    for type_id in record.vu_type_ids():
        items.append(MenuEntry(type_id, type_id, tag.value))
    return items


def build_menu(
    record: TachographRecord | Mapping[str, Any],
    blocks: CardBlocks | None = None,
) -> tuple[RenderInstruction, ...]:
    """Return render instructions for ``record``.

    Malformed records degrade to an empty menu instead of raising.
    """

    try:
        if not isinstance(record, TachographRecord):
            record = TachographRecord.model_validate(record)
        if record.is_card:
            if blocks is None:
                blocks = record.card_blocks()
            if blocks is None:
                return ()
            return tuple(_card_menu(blocks))
        return tuple(_vu_menu(record))
    except ValueError as exc:  # pydantic.ValidationError included
        logger.warning("Cannot build menu for malformed record: %s", exc)
        return ()


def menu_entries(instructions: tuple[RenderInstruction, ...]) -> list[MenuEntry]:
    return [item for item in instructions if isinstance(item, MenuEntry)]


__all__ = [
    "GENERATION_HEADERS",
    "InstructionKind",
    "MenuDivider",
    "MenuEntry",
    "MenuHeader",
    "RenderInstruction",
    "build_menu",
    "menu_entries",
]
