from __future__ import annotations

from thrive_admin.reconciler import BENEFICIARY_SCHEMA, VENDOR_SCHEMA, normalize_many
from thrive_admin.ui.filters import apply_filters, clean_filters
from thrive_admin.ui.forms import map_api_validation_errors, validate_fields

VENDOR_ROWS = [
    {"id": "1", "name": "Taco Hut", "category": "restaurant", "city": "Austin"},
    {"id": "2", "name": "Book Nook", "category": "Retail", "primary_contact": "Taylor"},
    {"id": "3", "name": "Spa Days", "category": "service"},
]


def test_clean_filters_treats_all_as_no_filter() -> None:
    assert clean_filters({"search": "  taco ", "category": "all", "type": "", "vendor": None}) == {
        "search": "taco"
    }


def test_apply_filters_search_is_case_insensitive_substring() -> None:
    records = normalize_many(VENDOR_ROWS, VENDOR_SCHEMA)

    matches = apply_filters(records, {"search": "TACO"}, VENDOR_SCHEMA)

    assert [record.id for record in matches] == ["1"]


def test_apply_filters_search_covers_secondary_fields() -> None:
    records = normalize_many(VENDOR_ROWS, VENDOR_SCHEMA)

    assert [record.id for record in apply_filters(records, {"search": "taylor"}, VENDOR_SCHEMA)] == ["2"]
    assert [record.id for record in apply_filters(records, {"search": "austin"}, VENDOR_SCHEMA)] == ["1"]


def test_apply_filters_category_is_exact_match_ignoring_case() -> None:
    records = normalize_many(VENDOR_ROWS, VENDOR_SCHEMA)

    matches = apply_filters(records, {"category": "retail"}, VENDOR_SCHEMA)

    assert [record.id for record in matches] == ["2"]


def test_apply_filters_type_uses_beneficiary_size() -> None:
    records = normalize_many(
        [
            {"id": "a", "name": "Food Bank", "type": "Large"},
            {"id": "b", "name": "Library", "size": "Small"},
            {"id": "c", "name": "Shelter"},
        ],
        BENEFICIARY_SCHEMA,
    )

    assert [record.id for record in apply_filters(records, {"type": "medium"}, BENEFICIARY_SCHEMA)] == ["c"]
    assert [record.id for record in apply_filters(records, {"type": "all"}, BENEFICIARY_SCHEMA)] == ["a", "b", "c"]


def test_validate_fields_reports_required_and_email_format() -> None:
    result = validate_fields(
        {"vendor_name": "  ", "email": "not-an-email", "website": "x"},
        ["vendor_name", "email", "category"],
        VENDOR_SCHEMA,
    )

    assert result.is_valid is False
    assert result.first_invalid_field == "vendor_name"
    assert result.field_errors["email"] == "Email is invalid. Use the format name@domain.com."
    assert "category" in result.field_errors
    assert result.values["vendor_name"] == ""


def test_validate_fields_without_schema_uses_field_names() -> None:
    result = validate_fields({"discount.title": ""}, ["discount.title"])

    assert result.field_errors == {"discount.title": "Discount title is required"}


def test_validate_fields_accepts_complete_values() -> None:
    result = validate_fields({"vendor_name": "Acme", "email": "a@acme.test"}, ["vendor_name", "email"], VENDOR_SCHEMA)

    assert result.is_valid is True
    assert result.first_invalid_field is None


def test_map_api_validation_errors_shapes() -> None:
    assert map_api_validation_errors({"email": "taken"}) == {"email": "taken"}
    assert map_api_validation_errors([{"field": "ein", "message": "bad format"}, {"nope": 1}]) == {
        "ein": "bad format"
    }
    assert map_api_validation_errors("oops") == {}
