from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import Field

from schemas.primitives import (
    DECIMAL_MAX_DIGITS,
    DECIMAL_PLACES,
    AlphanumericCode,
    Email,
    EntitySchema,
    KatakanaText,
    NoteText,
    PhoneNumber,
    PostalCode,
    optional,
    required_text,
)

WarehouseName = required_text(2, 100)
Address = required_text(5, 255)
Capacity = optional(
    Annotated[
        Decimal,
        Field(ge=1, le=100_000, max_digits=DECIMAL_MAX_DIGITS, decimal_places=DECIMAL_PLACES),
    ]
)
OptionalKatakana = optional(KatakanaText)
OptionalPhone = optional(PhoneNumber)


class WarehouseStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"
    CLOSED = "closed"


class Warehouse(EntitySchema):
    name: WarehouseName
    code: AlphanumericCode
    kana_name: OptionalKatakana = None
    contact_email: Email
    phone: PhoneNumber
    fax: OptionalPhone = None
    postal_code: PostalCode
    address: Address
    status: WarehouseStatus = WarehouseStatus.ACTIVE
    capacity_sqm: Capacity = None
    temperature_controlled: bool = False
    hazmat_storage: bool = False
    notes: NoteText = None
    is_active: bool = True
