from __future__ import annotations

from datetime import date
from typing import Any, Callable

TODAY = date(2026, 10, 18)


def vendor_payload() -> dict[str, Any]:
    return {
        "name": "Sample Trading Co.",
        "code": "ven001",
        "taxId": "T1234567890123",
        "kanaName": "サンプルトレーディング",
        "email": "Contact@Sample-Trading.co.jp",
        "phone": "03-1234-5678",
        "postalCode": "1000001",
        "address": "1-1-1 Marunouchi, Chiyoda-ku, Tokyo",
        "website": "https://www.sample-trading.co.jp",
        "businessCategories": ["IT equipment", "Office supplies"],
        "notes": "Preferred supplier",
        "status": "active",
    }


def receiving_payload() -> dict[str, Any]:
    return {
        "poRef": "PO-1001",
        "quantity": "12.5",
        "date": "2026-10-01",
        "lineItems": [
            {"itemId": "SKU-A1", "quantity": 10, "unitPrice": "120.00"},
            {"itemId": "SKU-B2", "quantity": "2.5", "unitPrice": 0},
        ],
    }


def invoice_match_payload() -> dict[str, Any]:
    return {
        "invoiceId": "INV-2026-001",
        "purchaseOrderId": "PO-1001",
        "receivingId": "RCV-77",
        "priceVarianceTolerance": "0.50",
        "quantityVarianceTolerance": 1,
    }


def credentials_payload() -> dict[str, Any]:
    return {"id": "a@b.com", "secret": "goodpassword"}


def warehouse_payload() -> dict[str, Any]:
    return {
        "name": "Tokyo Central",
        "code": "wh-001",
        "contactEmail": "warehouse@sample-logistics.co.jp",
        "phone": "03-9876-5432",
        "postalCode": "135-0061",
        "address": "3-1 Toyosu, Koto-ku, Tokyo",
        "status": "maintenance",
        "capacitySqm": 2500,
        "temperatureControlled": True,
    }


def user_profile_payload() -> dict[str, Any]:
    return {
        "displayName": "Hanako Sato",
        "email": "Hanako.Sato@Sample-Trading.co.jp",
        "language": "en",
        "notificationPreferences": {"smsNotifications": True},
    }


SAMPLES: dict[str, Callable[[], dict[str, Any]]] = {
    "Vendor": vendor_payload,
    "ReceivingRecord": receiving_payload,
    "InvoiceMatchCriteria": invoice_match_payload,
    "LoginCredentials": credentials_payload,
    "Warehouse": warehouse_payload,
    "UserProfile": user_profile_payload,
}
