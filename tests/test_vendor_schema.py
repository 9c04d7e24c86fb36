from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError
from samples import vendor_payload

from app.validation import ErrorKind, validate
from schemas.vendor_schema import Vendor, VendorStatus


def test_vendor_values_are_normalized(today: date) -> None:
    result = validate("Vendor", vendor_payload(), today=today)
    vendor = result.value
    assert isinstance(vendor, Vendor)
    assert vendor.id is None
    assert vendor.code == "VEN001"
    assert vendor.email == "contact@sample-trading.co.jp"
    assert vendor.postal_code == "100-0001"
    assert vendor.business_categories == ("IT equipment", "Office supplies")
    assert vendor.status is VendorStatus.ACTIVE


def test_vendor_contact_fields_required_by_backend(today: date) -> None:
    payload = {"name": "Minimal Vendor", "code": "MIN01", "tax_id": "1234567890123"}
    result = validate("Vendor", payload, today=today)
    missing = {e.field for e in result.errors if e.kind is ErrorKind.MISSING_FIELD}
    # Missing fields are reported under their camelCase alias.
    assert missing == {"email", "phone", "postalCode", "address"}


def test_remaining_vendor_fields_are_optional(today: date) -> None:
    payload = {
        "name": "Minimal Vendor",
        "code": "MIN01",
        "tax_id": "1234567890123",
        "email": "sales@minimal.co.jp",
        "phone": "06-1234-5678",
        "postal_code": "530-0001",
        "address": "1-1 Umeda, Kita-ku, Osaka",
    }
    result = validate("Vendor", payload, today=today)
    assert result.ok
    assert result.value is not None
    assert result.value.website is None
    assert result.value.business_categories is None


def test_blank_optional_fields_mean_not_provided(today: date) -> None:
    payload = vendor_payload()
    payload.update({"website": "", "fax": "  ", "kanaName": "", "notes": ""})
    result = validate("Vendor", payload, today=today)
    assert result.ok
    assert result.value is not None
    assert result.value.website is None
    assert result.value.fax is None


@pytest.mark.parametrize(
    ("key", "value", "expected_kind"),
    [
        ("name", "A", ErrorKind.RANGE_VIOLATION),
        ("name", "x" * 101, ErrorKind.RANGE_VIOLATION),
        ("code", "AB", ErrorKind.RANGE_VIOLATION),
        ("code", "VEN 001", ErrorKind.FORMAT_MISMATCH),
        ("taxId", "T123", ErrorKind.FORMAT_MISMATCH),
        ("taxId", "X1234567890123", ErrorKind.FORMAT_MISMATCH),
        ("kanaName", "さんぷる", ErrorKind.FORMAT_MISMATCH),
        ("email", "not-an-email", ErrorKind.FORMAT_MISMATCH),
        ("phone", "03-1234", ErrorKind.RANGE_VIOLATION),
        ("phone", "03(1234)5678", ErrorKind.FORMAT_MISMATCH),
        ("postalCode", "100-00011", ErrorKind.FORMAT_MISMATCH),
        ("address", "Tky", ErrorKind.RANGE_VIOLATION),
        ("website", "ftp://files.sample.co.jp", ErrorKind.FORMAT_MISMATCH),
        ("status", "deleted", ErrorKind.ENUM_MISMATCH),
        ("notes", "n" * 1001, ErrorKind.RANGE_VIOLATION),
    ],
)
def test_vendor_field_rules(key: str, value: object, expected_kind: ErrorKind, today: date) -> None:
    payload = vendor_payload()
    payload[key] = value
    result = validate("Vendor", payload, today=today)
    assert [(e.field, e.kind) for e in result.errors] == [(key, expected_kind)]


def test_business_categories_are_bounded(today: date) -> None:
    payload = vendor_payload()
    payload["businessCategories"] = [f"category {i}" for i in range(11)]
    result = validate("Vendor", payload, today=today)
    assert [(e.field, e.kind) for e in result.errors] == [
        ("businessCategories", ErrorKind.RANGE_VIOLATION)
    ]


def test_blank_business_category_is_reported_by_index(today: date) -> None:
    payload = vendor_payload()
    payload["businessCategories"] = ["IT equipment", " "]
    result = validate("Vendor", payload, today=today)
    assert [(e.field, e.kind) for e in result.errors] == [
        ("businessCategories.1", ErrorKind.MISSING_FIELD)
    ]


def test_http_website_is_rejected_only_when_https_is_required(today: date) -> None:
    payload = vendor_payload()
    payload["website"] = "http://www.sample-trading.co.jp"

    assert validate("Vendor", payload, today=today).ok

    strict = validate("Vendor", payload, today=today, require_https=True)
    assert [(e.field, e.code) for e in strict.errors] == [("website", "url_scheme")]


def test_vendor_is_immutable(today: date) -> None:
    result = validate("Vendor", vendor_payload(), today=today)
    assert result.value is not None
    with pytest.raises(ValidationError):
        result.value.name = "Renamed"  # type: ignore[misc]
