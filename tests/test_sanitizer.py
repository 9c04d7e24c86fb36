from __future__ import annotations

import pytest

from app.sanitizer import sanitize_payload, sanitize_text


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Sample Trading  ", "Sample Trading"),
        ("<b>Bold</b> name", "Bold name"),
        ("Hello<script>alert('x')</script>", "Hello"),
        ("<STYLE type='text/css'>p{}</STYLE>Styled", "Styled"),
        ("line\x00one\x07", "lineone"),
        ("tab\tand\nnewline", "tab\tand\nnewline"),
        ("1 < 2", "1 < 2"),
    ],
)
def test_sanitize_text(raw: str, expected: str) -> None:
    assert sanitize_text(raw) == expected


def test_sanitize_text_truncates_and_trims() -> None:
    assert sanitize_text("x" * 20, max_length=5) == "xxxxx"
    assert sanitize_text("abcd   efgh", max_length=6) == "abcd"


def test_sanitize_text_is_idempotent() -> None:
    raw = "  <i>Tokyo</i>\x01 Central <script>x</script> "
    once = sanitize_text(raw)
    assert sanitize_text(once) == once


def test_sanitize_payload_walks_nested_structures() -> None:
    payload = {
        "name": " <b>Vendor</b> ",
        "quantity": 5,
        "active": True,
        "lineItems": [{"itemId": "<i>SKU-1</i>"}],
        "tags": ("<u>a</u>", "b"),
    }
    cleaned = sanitize_payload(payload)
    assert cleaned == {
        "name": "Vendor",
        "quantity": 5,
        "active": True,
        "lineItems": [{"itemId": "SKU-1"}],
        "tags": ("a", "b"),
    }


def test_sanitize_payload_leaves_secrets_untouched() -> None:
    payload = {"id": " a@b.com ", "secret": " <pa$$word> "}
    cleaned = sanitize_payload(payload)
    assert cleaned == {"id": "a@b.com", "secret": " <pa$$word> "}


def test_sanitize_payload_passes_non_containers_through() -> None:
    assert sanitize_payload(None) is None
    assert sanitize_payload(42) == 42


def test_sanitize_payload_does_not_cut_long_values() -> None:
    notes = "n" * 1500
    assert sanitize_payload({"notes": notes}) == {"notes": notes}
