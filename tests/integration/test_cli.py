from __future__ import annotations

import json
import os

import pytest
import responses

from thrive_admin.cli import main


@pytest.fixture(autouse=True)
def _cli_env(monkeypatch, base_url: str) -> None:
    monkeypatch.setattr(os, "environ", {key: value for key, value in os.environ.items() if not key.startswith("THRIVE_")})
    monkeypatch.setenv("THRIVE_API_BASE_URL", base_url)
    monkeypatch.setenv("THRIVE_ADMIN_SECRET", "s3cret")


@responses.activate
def test_list_prints_table(base_url: str, capsys) -> None:
    responses.add(
        responses.GET,
        f"{base_url}/vendors",
        json={
            "success": True,
            "data": [{"id": "v1", "name": "Acme", "category": "retail", "is_active": True}],
            "pagination": {"page": 1, "limit": 20, "total": 1, "totalPages": 1},
        },
        status=200,
    )

    exit_code = main(["list", "vendors"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "vendors page 1/1 (total 1)" in out
    assert "Acme" in out
    assert "ACTIVE" in out
    assert responses.calls[0].request.headers["X-Admin-Secret"] == "s3cret"


@responses.activate
def test_list_json_applies_page_local_search(base_url: str, capsys) -> None:
    responses.add(
        responses.GET,
        f"{base_url}/discounts",
        json={"success": True, "data": [{"id": "d1", "title": "Taco Tuesday"}, {"id": "d2", "title": "Spa day"}]},
        status=200,
    )

    exit_code = main(["list", "discounts", "--search", "taco", "--json"])

    rows = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [row["id"] for row in rows] == ["d1"]
    assert rows[0]["posCode"] == "Not provided"


@responses.activate
def test_list_reports_endpoint_not_ready(base_url: str, capsys) -> None:
    responses.add(responses.GET, f"{base_url}/beneficiaries", json={"error": "Not found"}, status=404)

    exit_code = main(["list", "beneficiaries"])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "[WARNING] message=This section is not available yet." in out


@responses.activate
def test_show_prints_normalized_record(base_url: str, capsys) -> None:
    responses.add(
        responses.GET,
        f"{base_url}/vendors/v1",
        json={"success": True, "data": {"id": "v1", "name": "Acme", "phone": "555-1212"}},
        status=200,
    )

    exit_code = main(["show", "vendors", "v1", "--json"])

    record = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert record["vendorName"] == "Acme"
    assert record["contactNumber"] == "555-1212"
    assert record["email"] == "Not provided"


@responses.activate
def test_delete_reloads_listing(base_url: str, capsys) -> None:
    responses.add(responses.DELETE, f"{base_url}/vendors/v1", json={"success": True}, status=200)
    responses.add(responses.GET, f"{base_url}/vendors", json={"success": True, "data": []}, status=200)

    exit_code = main(["delete", "vendors", "v1"])

    assert exit_code == 0
    assert "Vendor deleted." in capsys.readouterr().out
    assert [call.request.method for call in responses.calls] == ["DELETE", "GET"]


@responses.activate
def test_vendor_discounts_falls_back_to_scan(base_url: str, capsys) -> None:
    responses.add(responses.GET, f"{base_url}/vendors/v1/discounts", json={"error": "Not found"}, status=404)
    responses.add(
        responses.GET,
        f"{base_url}/discounts",
        json={"success": True, "data": [{"id": "d1", "vendor_id": "v1", "title": "Taco Tuesday"}]},
        status=200,
    )

    exit_code = main(["vendor-discounts", "v1"])

    assert exit_code == 0
    assert "Taco Tuesday" in capsys.readouterr().out


def test_missing_config_exits_with_code_2(monkeypatch, capsys) -> None:
    monkeypatch.delenv("THRIVE_ADMIN_SECRET")

    exit_code = main(["list", "vendors"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 2
    assert payload["error"] == "CONFIG_ERROR"
    assert "THRIVE_ADMIN_SECRET" in payload["message"]
