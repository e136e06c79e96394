"""Tests for menu construction across card and vehicle unit records."""

from __future__ import annotations

from conftest import make_card_record, make_vu_record

from src.tachoview.catalog.menu import (
    MenuDivider,
    MenuEntry,
    MenuHeader,
    build_menu,
    menu_entries,
)
from src.tachoview.data.schemas import TachographRecord


def _tags(menu) -> list[str]:
    return [entry.generation_tag for entry in menu_entries(menu)]


def test_gen2_only_card_scenario() -> None:
    record = {
        "header": {"generation": "SecondGeneration", "dataType": "Card"},
        "cardDataResponses": {
            "gen2": {
                "applicationIdentification": {"typeOfTachographCardId": "X"},
                "cardGeneration": "Gen2",
                "eventsData": {"records": [1]},
                "identification": {"cardNumber": "1"},
            }
        },
    }

    menu = build_menu(record)

    assert menu == (
        MenuHeader("X"),
        MenuEntry("Identification", "identification", "Gen2"),
        MenuDivider(),
        MenuHeader("Card Generation 2"),
        MenuEntry("EventsData", "eventsData", "Gen2"),
    )


def test_dual_generation_card_lists_gen1_then_gen2(card_record) -> None:
    menu = build_menu(card_record)

    assert menu[:5] == (
        MenuHeader("DriverCard"),
        MenuEntry("Identification", "identification", "Gen1"),
        MenuEntry("IC", "cardChipIdentification", "Gen1"),
        MenuEntry("ICC", "cardIccIdentification", "Gen1"),
        MenuDivider(),
    )
    sections = menu[5:]
    assert sections == (
        MenuHeader("Card Generation 1"),
        MenuEntry("VehiclesUsed", "vehiclesUsed", "Gen1"),
        MenuEntry("EventsData", "eventsData", "Gen1"),
        MenuEntry("CACertificate", "caCertificate", "Gen1"),
        MenuHeader("Card Generation 2"),
        MenuEntry("EventsData", "eventsData", "Gen2"),
        MenuEntry("FaultsData", "faultsData", "Gen2"),
        MenuEntry("CardDownload", "cardDownload", "Gen2"),
        MenuEntry("GnssPlaces", "gnssPlaces", "Gen2"),
    )


def test_gen1_only_card_has_no_gen2_entries(gen1_record) -> None:
    menu = build_menu(gen1_record)

    assert "Gen2" not in _tags(menu)
    assert MenuHeader("Card Generation 2") not in menu
    assert MenuHeader("Card Generation 1") in menu


def test_legacy_flat_card_acts_as_gen1_without_header(legacy_record) -> None:
    menu = build_menu(legacy_record)

    assert menu[0] == MenuHeader("DriverCard")
    assert not any(
        isinstance(item, MenuHeader) and item.title.startswith("Card Generation") for item in menu
    )
    assert set(_tags(menu)) == {"Gen1"}
    assert MenuEntry("EventsData", "eventsData", "Gen1") in menu


def test_header_label_falls_back_without_application_identification() -> None:
    record = make_card_record(gen2=False)
    del record["cardDataResponses"]["gen1"]["applicationIdentification"]

    menu = build_menu(record)

    assert menu[0] == MenuHeader("Card")


def test_vu_scenario_deduplicates_type_ids() -> None:
    record = make_vu_record(["EF_Events", "EF_Faults", "EF_Events"])

    menu = build_menu(record)

    assert menu == (
        MenuHeader("VUGen1"),
        MenuEntry("EF_Events", "EF_Events", "VUGen1"),
        MenuEntry("EF_Faults", "EF_Faults", "VUGen1"),
    )


def test_vu_dedup_preserves_first_occurrence() -> None:
    menu = build_menu(make_vu_record(["A", "B", "A", "C"], generation="SecondGeneration"))

    assert [entry.key for entry in menu_entries(menu)] == ["A", "B", "C"]
    assert set(_tags(menu)) == {"VUGen2"}
    assert menu[0] == MenuHeader("VUGen2")


def test_empty_vu_payload_only_renders_header() -> None:
    assert build_menu(make_vu_record([])) == (MenuHeader("VUGen1"),)
    record = {"header": {"generation": "FirstGeneration", "dataType": "VU"}}
    assert build_menu(record) == (MenuHeader("VUGen1"),)


def test_empty_card_payload_renders_nothing() -> None:
    record = {"header": {"generation": "FirstGeneration", "dataType": "Card"}, "cardDataResponses": {}}

    assert build_menu(record) == ()


def test_malformed_records_degrade_to_empty_menu() -> None:
    assert build_menu({}) == ()
    assert build_menu({"header": {"generation": "ThirdGeneration", "dataType": "Card"}}) == ()
    assert build_menu({"header": {"generation": "FirstGeneration", "dataType": "Card"}}) == ()
    assert (
        build_menu(
            {
                "header": {"generation": "FirstGeneration", "dataType": "Card"},
                "cardDataResponses": ["not", "a", "mapping"],
            }
        )
        == ()
    )


def test_build_menu_accepts_typed_record(card_record) -> None:
    typed = TachographRecord.model_validate(card_record)

    assert build_menu(typed) == build_menu(card_record)


def test_instruction_payloads() -> None:
    assert MenuEntry("IC", "cardChipIdentification", "Gen1").as_payload() == {
        "kind": "entry",
        "title": "IC",
        "key": "cardChipIdentification",
        "generationTag": "Gen1",
    }
    assert MenuHeader("VUGen1").as_payload() == {"kind": "header", "title": "VUGen1"}
    assert MenuDivider().as_payload() == {"kind": "divider"}
