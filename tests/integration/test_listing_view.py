from __future__ import annotations

import json

import responses

from thrive_admin.clients import BeneficiariesClient, VendorsClient
from thrive_admin.reconciler import BENEFICIARY_SCHEMA, VENDOR_SCHEMA
from thrive_admin.ui import ListView


def _vendor_rows(count: int, start: int = 1) -> list[dict]:
    return [{"id": str(index), "name": f"Vendor {index}", "category": "retail"} for index in range(start, start + count)]


@responses.activate
def test_load_page_excludes_soft_deleted_rows_from_total(http, base_url: str) -> None:
    rows = _vendor_rows(4)
    rows[1]["deleted_at"] = "2024-02-01T00:00:00Z"
    responses.add(
        responses.GET,
        f"{base_url}/vendors",
        json={"success": True, "data": rows, "pagination": {"page": 1, "limit": 20, "total": 4, "totalPages": 1}},
        status=200,
    )
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)

    page = view.load_page()

    assert page is not None
    assert [record.id for record in page.records] == ["1", "3", "4"]
    assert page.excluded == 1
    assert page.total == 3
    assert view.total == 3
    assert view.feedback.banner is None


@responses.activate
def test_load_page_requests_page_and_limit(http, base_url: str) -> None:
    responses.add(
        responses.GET,
        f"{base_url}/vendors",
        json={"success": True, "data": _vendor_rows(5, start=21), "pagination": {"total": 45, "limit": 20}},
        status=200,
    )
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)

    page = view.load_page(page=2)

    request_url = responses.calls[0].request.url
    assert "page=2" in request_url and "limit=20" in request_url
    assert page is not None
    assert page.total == 45
    assert page.total_pages == 3
    assert view.pagination.has_next is True
    assert view.pagination.has_prev is True


@responses.activate
def test_total_falls_back_to_row_count_without_pagination(http, base_url: str) -> None:
    responses.add(responses.GET, f"{base_url}/vendors", json={"vendors": _vendor_rows(3)}, status=200)
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)

    page = view.load_page()

    assert page is not None
    assert page.total == 3
    assert page.total_pages == 1


@responses.activate
def test_filters_apply_to_current_page_only(http, base_url: str) -> None:
    rows = _vendor_rows(3)
    rows[2]["name"] = "Taco Hut"
    rows[2]["category"] = "restaurant"
    responses.add(
        responses.GET,
        f"{base_url}/vendors",
        json={"success": True, "data": rows, "pagination": {"total": 60, "limit": 20}},
        status=200,
    )
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)
    view.load_page()

    visible = view.set_filters(search="taco")

    assert [record.id for record in visible] == ["3"]
    assert view.total == 60
    assert len(responses.calls) == 1
    assert [record.id for record in view.set_filters(search="", category="retail")] == ["1", "2"]


@responses.activate
def test_not_ready_endpoint_shows_banner_and_empty_list(http, base_url: str) -> None:
    responses.add(responses.GET, f"{base_url}/beneficiaries", json={"error": "Not found"}, status=404)
    view = ListView(BeneficiariesClient(http), BENEFICIARY_SCHEMA)

    page = view.load_page()

    assert page is not None and page.failed is True
    assert page.records == []
    assert view.total == 0
    assert view.feedback.banner is not None
    assert view.feedback.banner.level == "warning"
    assert "beneficiaries endpoint is not ready" in view.feedback.banner.message


@responses.activate
def test_server_error_shows_error_banner(http, base_url: str) -> None:
    responses.add(responses.GET, f"{base_url}/vendors", json={}, status=500)
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)

    page = view.load_page()

    assert page is not None and page.failed is True
    assert view.feedback.banner is not None
    assert view.feedback.banner.message == "Failed to load vendors, please try again."


@responses.activate
def test_delete_removes_row_then_reloads(http, base_url: str) -> None:
    responses.add(
        responses.GET,
        f"{base_url}/vendors",
        json={"success": True, "data": _vendor_rows(3), "pagination": {"total": 3}},
        status=200,
    )
    responses.add(responses.DELETE, f"{base_url}/vendors/2", json={"success": True}, status=200)
    responses.add(
        responses.GET,
        f"{base_url}/vendors",
        json={"success": True, "data": [row for row in _vendor_rows(3) if row["id"] != "2"], "pagination": {"total": 2}},
        status=200,
    )
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)
    view.load_page()

    assert view.delete("2") is True

    assert [call.request.method for call in responses.calls] == ["GET", "DELETE", "GET"]
    assert [record.id for record in view.records] == ["1", "3"]
    assert view.total == 2
    toasts = view.feedback.drain()
    assert toasts[-1].level == "success"
    assert toasts[-1].message == "Vendor deleted."


@responses.activate
def test_failed_delete_keeps_rows_and_toasts(http, base_url: str) -> None:
    responses.add(
        responses.GET,
        f"{base_url}/vendors",
        json={"success": True, "data": _vendor_rows(2), "pagination": {"total": 2}},
        status=200,
    )
    responses.add(responses.DELETE, f"{base_url}/vendors/1", json={"error": "Vendor has active discounts"}, status=409)
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)
    view.load_page()

    assert view.delete("1") is False

    assert [record.id for record in view.records] == ["1", "2"]
    assert view.total == 2
    assert view.feedback.drain()[0].message == "Vendor has active discounts"


@responses.activate
def test_response_after_close_is_ignored(http, base_url: str) -> None:
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)

    def _close_mid_flight(request):
        view.close()
        return (200, {}, json.dumps({"success": True, "data": _vendor_rows(2)}))

    responses.add_callback(responses.GET, f"{base_url}/vendors", callback=_close_mid_flight)

    assert view.load_page() is None
    assert view.records == []
    assert view.feedback.banner is None
    assert view.load_page() is None
    assert len(responses.calls) == 1


@responses.activate
def test_next_and_prev_move_between_pages(http, base_url: str) -> None:
    for start in (1, 21, 1):
        responses.add(
            responses.GET,
            f"{base_url}/vendors",
            json={"success": True, "data": _vendor_rows(2, start=start), "pagination": {"total": 40, "limit": 20}},
            status=200,
        )
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)
    view.load_page()

    second = view.next()
    first = view.prev()

    assert second is not None and second.page == 2
    assert first is not None and first.page == 1
    assert [call.request.url.split("page=")[1][0] for call in responses.calls] == ["1", "2", "1"]


@responses.activate
def test_non_json_success_body_shows_error_banner(http, base_url: str) -> None:
    responses.add(responses.GET, f"{base_url}/vendors", body="<html>gateway</html>", status=200)
    view = ListView(VendorsClient(http), VENDOR_SCHEMA)

    page = view.load_page()

    assert page is not None and page.failed is True
    assert view.feedback.banner is not None
    assert view.feedback.banner.level == "error"
    assert view.feedback.banner.message == "Failed to load vendors, please try again."


def test_closed_views_release_their_context(http) -> None:
    views = [ListView(VendorsClient(http), VENDOR_SCHEMA) for _ in range(3)]
    assert len(http._context_versions) == 3

    for view in views:
        view.close()

    assert http._context_versions == {}
