"""Typed views over parsed tachograph records."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CARD_DATA_TYPE = "Card"


class Generation(str, Enum):
    """Protocol generation reported in the record header."""

    FIRST = "FirstGeneration"
    SECOND = "SecondGeneration"


class GenerationTag(str, Enum):
    """Tag carried by menu entries to route a selection back to its source."""

    GEN1 = "Gen1"
    GEN2 = "Gen2"
    VU_GEN1 = "VUGen1"
    VU_GEN2 = "VUGen2"

    @property
    def is_card(self) -> bool:
        return self in (GenerationTag.GEN1, GenerationTag.GEN2)

    @classmethod
    def for_vu(cls, generation: Generation) -> "GenerationTag":
        if generation is Generation.SECOND:
            return cls.VU_GEN2
        return cls.VU_GEN1

    @classmethod
    def parse(cls, value: "GenerationTag | str") -> "GenerationTag | None":
        """Return the matching tag or ``None`` for literal VU type ids."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Header(BaseModel):
    """Record header: generation and data type decide the payload field."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    generation: Generation
    data_type: str = Field(alias="dataType")

    @property
    def is_card(self) -> bool:
        return self.data_type == CARD_DATA_TYPE


@functools.lru_cache(maxsize=None)
def _alias_index(model: type[BaseModel]) -> dict[str, str]:
    return {(info.alias or name): name for name, info in model.model_fields.items()}


class CardGenBlock(BaseModel):
    """Sections of a first generation driver card.

    Section content stays opaque; each catalog key is a declared optional
    field so that presence is a lookup rather than attribute probing.
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    card_generation: Any = None
    application_identification: Any = None
    identification: Any = None
    card_chip_identification: Any = None
    card_icc_identification: Any = None
    driving_licence_information: Any = None
    vehicles_used: Any = None
    events_data: Any = None
    faults_data: Any = None
    places: Any = None
    current_usage: Any = None
    driver_activity_data: Any = None
    specific_conditions: Any = None
    control_activity_data: Any = None
    card_certificate: Any = None
    ca_certificate: Any = None
    data_files: Any = None

    def part(self, key: str) -> Any:
        """Return the section stored under the camelCase ``key`` or ``None``."""

        name = _alias_index(type(self)).get(key)
        if name is None:
            return None
        return getattr(self, name)

    def has_part(self, key: str) -> bool:
        return self.part(key) is not None

    @property
    def type_of_tachograph_card_id(self) -> str | None:
        application = self.application_identification
        if isinstance(application, Mapping):
            value = application.get("typeOfTachographCardId")
            if value is not None:
                return str(value)
        return None

    @property
    def generation_tag(self) -> GenerationTag | None:
        if self.card_generation is None:
            return None
        return GenerationTag.parse(str(self.card_generation))


class Gen2CardBlock(CardGenBlock):
    """Second generation cards add certificates, GNSS and download data."""

    application_identification_v2: Any = None
    card_sign_certificate: Any = None
    link_certificate: Any = None
    card_download: Any = None
    vehicle_units_used: Any = None
    gnss_places: Any = None


@dataclass(slots=True, frozen=True)
class CardBlocks:
    """Canonical ``gen1``/``gen2`` pair resolved once from card responses.

    Legacy records without a ``gen1``/``gen2`` wrapper are stored as ``gen1``
    with ``legacy`` set.
    """

    gen1: CardGenBlock | None = None
    gen2: Gen2CardBlock | None = None
    legacy: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "CardBlocks":
        if not isinstance(payload, Mapping):
            raise ValueError("cardDataResponses must be a mapping.")
        if not payload:
            return cls()
        if "gen1" in payload or "gen2" in payload:
            gen1 = payload.get("gen1")
            gen2 = payload.get("gen2")
            return cls(
                gen1=CardGenBlock.model_validate(gen1) if gen1 is not None else None,
                gen2=Gen2CardBlock.model_validate(gen2) if gen2 is not None else None,
            )
        return cls(gen1=CardGenBlock.model_validate(payload), legacy=True)

    @property
    def root(self) -> CardGenBlock | None:
        """Block used for the identification header (``gen1`` preferred)."""

        return self.gen1 if self.gen1 is not None else self.gen2

    @property
    def root_tag(self) -> GenerationTag | None:
        if self.gen1 is not None:
            return GenerationTag.GEN1
        if self.gen2 is not None:
            return GenerationTag.GEN2
        return None

    def block_for(self, tag: GenerationTag) -> CardGenBlock | None:
        if tag is GenerationTag.GEN1:
            return self.gen1
        if tag is GenerationTag.GEN2:
            return self.gen2
        return None

    def present(self) -> Iterator[tuple[GenerationTag, CardGenBlock]]:
        if self.gen1 is not None:
            yield GenerationTag.GEN1, self.gen1
        if self.gen2 is not None:
            yield GenerationTag.GEN2, self.gen2


class TachographRecord(BaseModel):
    """Validated top-level view of a parsed record."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    header: Header
    card_data_responses: Any = Field(default=None, alias="cardDataResponses")
    transfer_res_params: Any = Field(default=None, alias="transferResParams")

    @property
    def is_card(self) -> bool:
        return self.header.is_card

    def card_blocks(self) -> CardBlocks | None:
        if not self.is_card or self.card_data_responses is None:
            return None
        return CardBlocks.from_payload(self.card_data_responses)

    @property
    def vu_items(self) -> list[Mapping[str, Any]]:
        items = self.transfer_res_params
        if self.is_card or not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, Mapping)]

    def vu_type_ids(self) -> list[str]:
        """Distinct ``typeId`` values in first-occurrence order."""

        type_ids = (item.get("typeId") for item in self.vu_items)
        return list(dict.fromkeys(str(type_id) for type_id in type_ids if type_id is not None))


__all__ = [
    "CARD_DATA_TYPE",
    "CardBlocks",
    "CardGenBlock",
    "Gen2CardBlock",
    "Generation",
    "GenerationTag",
    "Header",
    "TachographRecord",
]
