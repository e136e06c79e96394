"""Shared record fixtures."""

from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

from src.tachoview.data.schemas import GenerationTag

GEN1_KEY = bytes(range(144))
GEN2_KEY = bytes(range(205))

_GEN1_BLOCK: Dict[str, Any] = {
    "cardGeneration": "Gen1",
    "applicationIdentification": {"typeOfTachographCardId": "DriverCard", "noOfEventsPerType": 6},
    "cardChipIdentification": {"icSerialNumber": "1A2B3C4D"},
    "cardIccIdentification": {"clockStop": 3, "cardExtendedSerialNumber": "0042"},
    "identification": {"cardNumber": "D1234567890000", "cardHolderName": "Doe John"},
    "eventsData": [{"eventType": "CardConflict", "eventBeginTime": "2024-01-01T08:00:00Z"}],
    "vehiclesUsed": {"vehiclePointerNewestRecord": 0, "records": []},
    "currentUsage": None,
    "caCertificate": {"raw": "7f21"},
    "dataFiles": {"EventsData": [1, 2, 3], "Identification": [4, 5]},
}

_GEN2_BLOCK: Dict[str, Any] = {
    "cardGeneration": "Gen2",
    "applicationIdentification": {"typeOfTachographCardId": "DriverCard"},
    "identification": {"cardNumber": "D1234567890000"},
    "faultsData": [{"faultType": "PowerSupplyInterruption"}],
    "eventsData": [{"eventType": "TimeOverlap"}],
    "cardDownload": "2024-03-01T10:00:00Z",
    "gnssPlaces": {"records": [{"lat": 48.1, "lon": 11.5}]},
    "dataFiles": {"EventsData": [9, 9], "GnssPlaces": [7]},
}


def make_card_record(gen1: bool = True, gen2: bool = True) -> Dict[str, Any]:
    responses: Dict[str, Any] = {}
    if gen1:
        responses["gen1"] = copy.deepcopy(_GEN1_BLOCK)
    if gen2:
        responses["gen2"] = copy.deepcopy(_GEN2_BLOCK)
    generation = "SecondGeneration" if gen2 else "FirstGeneration"
    return {
        "header": {"generation": generation, "dataType": "Card"},
        "cardDataResponses": responses,
    }


def make_vu_record(type_ids: list[str], generation: str = "FirstGeneration") -> Dict[str, Any]:
    return {
        "header": {"generation": generation, "dataType": "VU"},
        "transferResParams": [
            {"typeId": type_id, "index": index} for index, type_id in enumerate(type_ids)
        ],
    }


@pytest.fixture
def card_record() -> Dict[str, Any]:
    return make_card_record()


@pytest.fixture
def gen1_record() -> Dict[str, Any]:
    return make_card_record(gen2=False)


@pytest.fixture
def legacy_record() -> Dict[str, Any]:
    flat = copy.deepcopy(_GEN1_BLOCK)
    return {
        "header": {"generation": "FirstGeneration", "dataType": "Card"},
        "cardDataResponses": flat,
    }


@pytest.fixture
def vu_record() -> Dict[str, Any]:
    return make_vu_record(["EF_Events", "EF_Faults", "EF_Events"])


@pytest.fixture
def erca_keys() -> Dict[GenerationTag, bytes]:
    return {GenerationTag.GEN1: GEN1_KEY, GenerationTag.GEN2: GEN2_KEY}


def accept_all_verifier(data_files, public_key: bytes) -> bool:
    return True
