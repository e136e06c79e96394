"""HTTP tests for upload, navigation, exports and verification status."""

from __future__ import annotations

import io
import json
import zipfile

import pytest
from fastapi.testclient import TestClient

from conftest import make_card_record, make_vu_record

from src.tachoview.api.main import create_app
from src.tachoview.config import Settings
from src.tachoview.ui.state import create_viewer
from src.tachoview.verification import DeferredQueue

JSON_ACCEPT = {"accept": "application/json"}


def _client(**viewer_options) -> TestClient:
    settings = Settings.from_env({})
    viewer_options.setdefault("public_keys", {})
    viewer = create_viewer(settings, **viewer_options)
    return TestClient(create_app(viewer, settings))


def _upload(client: TestClient, record, name: str = "Card0004.json", **kwargs):
    return client.post(
        "/records",
        files={"record_file": (name, json.dumps(record).encode("utf-8"), "application/json")},
        **kwargs,
    )


@pytest.fixture
def client() -> TestClient:
    return _client()


def test_upload_returns_menu_and_raw_content(client, card_record) -> None:
    response = _upload(client, card_record, headers=JSON_ACCEPT)

    assert response.status_code == 200
    payload = response.json()["results_payload"]
    assert payload["file_name"] == "Card0004.json"
    assert payload["record_version"] == 1
    assert payload["menu"][0] == {"kind": "header", "title": "DriverCard"}
    assert {"kind": "divider"} in payload["menu"]
    assert payload["selection"] is None
    assert payload["exports"] == {"all": True, "selected": False}
    assert json.loads(payload["content"]) == card_record


def test_upload_without_json_accept_redirects(client, card_record) -> None:
    response = _upload(client, card_record, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_invalid_upload_is_unprocessable(client) -> None:
    response = client.post(
        "/records",
        files={"record_file": ("broken.json", b"{oops", "application/json")},
        headers=JSON_ACCEPT,
    )

    assert response.status_code == 422
    assert "not valid JSON" in response.json()["detail"]


def test_part_selection_and_not_found(client, card_record) -> None:
    assert client.get("/records/parts/Gen1/eventsData").status_code == 404

    _upload(client, card_record, headers=JSON_ACCEPT)
    response = client.get("/records/parts/Gen2/gnssPlaces")

    assert response.status_code == 200
    payload = response.json()["results_payload"]
    assert payload["selection"] == {"key": "gnssPlaces", "generationTag": "Gen2"}
    assert payload["exports"]["selected"] is True
    assert json.loads(payload["content"]) == card_record["cardDataResponses"]["gen2"]["gnssPlaces"]

    missing = client.get("/records/parts/Gen1/gnssPlaces")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Part not found"


def test_menu_endpoint_omits_content(client) -> None:
    _upload(client, make_vu_record(["EF_Events", "EF_Faults"]), name="vu.json", headers=JSON_ACCEPT)

    payload = client.get("/records/menu").json()["results_payload"]

    assert "content" not in payload
    assert [item.get("key") for item in payload["menu"]] == [None, "EF_Events", "EF_Faults"]


def test_exports_before_load_are_empty(client) -> None:
    for path in ("/export/all", "/export/selected", "/export/catalog.csv", "/export/archive"):
        assert client.get(path).status_code == 204


def test_export_downloads(client, card_record) -> None:
    _upload(client, card_record, headers=JSON_ACCEPT)
    client.get("/records/parts/Gen1/eventsData")

    everything = client.get("/export/all")
    selected = client.get("/export/selected")

    assert everything.status_code == 200
    assert 'filename="Card0004-all.json"' in everything.headers["content-disposition"]
    assert everything.json() == card_record
    assert 'filename="Card0004-eventsData.json"' in selected.headers["content-disposition"]
    assert selected.json() == card_record["cardDataResponses"]["gen1"]["eventsData"]


def test_catalog_csv_download(client, card_record) -> None:
    _upload(client, card_record, headers=JSON_ACCEPT)

    response = client.get("/export/catalog.csv")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="Card0004-catalog.csv"' in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert lines[0] == "group,title,key,generation_tag"
    assert "DriverCard,IC,cardChipIdentification,Gen1" in lines


def test_archive_download_contains_every_part(client, card_record) -> None:
    _upload(client, card_record, headers=JSON_ACCEPT)

    response = client.get("/export/archive")

    assert response.status_code == 200
    assert 'filename="Card0004-parts.zip"' in response.headers["content-disposition"]
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        names = archive.namelist()
        assert json.loads(archive.read("Card0004-all.json")) == card_record
        events = json.loads(archive.read("Gen2/Card0004-eventsData.json"))
    assert "catalog.csv" in names
    assert "Gen1/Card0004-eventsData.json" in names
    assert "Gen1/Card0004-cardChipIdentification.json" in names
    assert events == card_record["cardDataResponses"]["gen2"]["eventsData"]


def test_index_renders_menu_and_selection(client, card_record) -> None:
    empty = client.get("/")
    assert empty.status_code == 200
    assert 'name="record_file"' in empty.text

    _upload(client, card_record, headers=JSON_ACCEPT)
    page = client.get("/", params={"key": "vehiclesUsed", "gen": "Gen1"})

    assert page.status_code == 200
    assert "Card Generation 2" in page.text
    assert "/?key=gnssPlaces&gen=Gen2" in page.text
    assert 'class="selected">VehiclesUsed</a>' in page.text
    assert "/export/selected" in page.text
    assert "vehiclePointerNewestRecord" in page.text


def test_verification_results_follow_current_record(erca_keys) -> None:
    queue = DeferredQueue()
    calls = []

    def verifier(data_files, public_key):
        calls.append(len(public_key))
        return True

    client = _client(verifier=verifier, public_keys=erca_keys, scheduler=queue)

    _upload(client, make_card_record(), headers=JSON_ACCEPT)
    assert client.get("/records/verification").json()["results_payload"]["verification"] == []

    queue.run_pending()
    payload = client.get("/records/verification").json()["results_payload"]

    assert calls == [144, 205]
    assert payload["record_version"] == 1
    assert [(item["generationTag"], item["status"]) for item in payload["verification"]] == [
        ("Gen1", "Valid"),
        ("Gen2", "Valid"),
    ]

    _upload(client, make_card_record(gen2=False), headers=JSON_ACCEPT)
    assert client.get("/records/verification").json()["results_payload"]["verification"] == []
