"""Static catalog of the selectable data parts of a driver card."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.tachoview.data.schemas import GenerationTag


class PartGroup(str, Enum):
    """Where a part is rendered in the menu."""

    IDENTIFICATION = "identification"
    APPLICATION = "application"
    SECTION = "section"


@dataclass(slots=True, frozen=True)
class CatalogRow:
    """One selectable data part."""

    label: str
    key: str
    availability: frozenset[GenerationTag]
    group: PartGroup = PartGroup.SECTION

    def available_for(self, tag: GenerationTag) -> bool:
        return tag in self.availability


_BOTH = frozenset({GenerationTag.GEN1, GenerationTag.GEN2})
_GEN2_ONLY = frozenset({GenerationTag.GEN2})

CATALOG: tuple[CatalogRow, ...] = (
    CatalogRow("Identification", "identification", _BOTH, PartGroup.IDENTIFICATION),
    CatalogRow("IC", "cardChipIdentification", _BOTH, PartGroup.IDENTIFICATION),
    CatalogRow("ICC", "cardIccIdentification", _BOTH, PartGroup.IDENTIFICATION),
    CatalogRow("ApplicationIdentification", "applicationIdentification", _BOTH, PartGroup.APPLICATION),
    CatalogRow("DrivingLicenceInformation", "drivingLicenceInformation", _BOTH),
    CatalogRow("VehiclesUsed", "vehiclesUsed", _BOTH),
    CatalogRow("EventsData", "eventsData", _BOTH),
    CatalogRow("FaultsData", "faultsData", _BOTH),
    CatalogRow("Places", "places", _BOTH),
    CatalogRow("CurrentUsage", "currentUsage", _BOTH),
    CatalogRow("DriverActivityData", "driverActivityData", _BOTH),
    CatalogRow("SpecificConditions", "specificConditions", _BOTH),
    CatalogRow("ControlActivityData", "controlActivityData", _BOTH),
    CatalogRow("CardCertificate", "cardCertificate", _BOTH),
    CatalogRow("CACertificate", "caCertificate", _BOTH),
    CatalogRow("ApplicationIdentificationV2", "applicationIdentificationV2", _GEN2_ONLY),
    CatalogRow("CardSignCertificate", "cardSignCertificate", _GEN2_ONLY),
    CatalogRow("LinkCertificate", "linkCertificate", _GEN2_ONLY),
    CatalogRow("CardDownload", "cardDownload", _GEN2_ONLY),
    CatalogRow("VehicleUnitsUsed", "vehicleUnitsUsed", _GEN2_ONLY),
    CatalogRow("GnssPlaces", "gnssPlaces", _GEN2_ONLY),
)


def rows_for(tag: GenerationTag, group: PartGroup | None = None) -> tuple[CatalogRow, ...]:
    """Catalog rows available for ``tag`` in declaration order."""

    return tuple(
        row
        for row in CATALOG
        if row.available_for(tag) and (group is None or row.group is group)
    )


GEN1_ROWS = rows_for(GenerationTag.GEN1)
GEN2_ROWS = rows_for(GenerationTag.GEN2)
IDENTIFICATION_ROWS = rows_for(GenerationTag.GEN1, PartGroup.IDENTIFICATION)


def find_row(tag: GenerationTag, key: str) -> CatalogRow | None:
    for row in rows_for(tag):
        if row.key == key:
            return row
    return None


__all__ = [
    "CATALOG",
    "CatalogRow",
    "GEN1_ROWS",
    "GEN2_ROWS",
    "IDENTIFICATION_ROWS",
    "PartGroup",
    "find_row",
    "rows_for",
]
