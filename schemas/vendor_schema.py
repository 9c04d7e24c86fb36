from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import Field

from schemas.primitives import (
    AlphanumericCode,
    Email,
    EntitySchema,
    KatakanaText,
    NoteText,
    PhoneNumber,
    PostalCode,
    SecureUrl,
    optional,
    optional_text,
    required_text,
)

# Qualified invoice issuer number: corporate number with optional "T" prefix.
TAX_ID_PATTERN = r"^[Tt]?\d{13}$"
MAX_BUSINESS_CATEGORIES = 10

VendorId = optional_text(1, 64)
VendorName = required_text(2, 100)
TaxId = required_text(pattern=TAX_ID_PATTERN, to_upper=True)
Address = required_text(5, 255)
BusinessCategories = optional(
    Annotated[tuple[required_text(1, 100), ...], Field(max_length=MAX_BUSINESS_CATEGORIES)]
)
OptionalKatakana = optional(KatakanaText)
OptionalPhone = optional(PhoneNumber)
OptionalUrl = optional(SecureUrl)


class VendorStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Vendor(EntitySchema):
    id: VendorId = None
    name: VendorName
    code: AlphanumericCode
    tax_id: TaxId
    kana_name: OptionalKatakana = None
    email: Email
    phone: PhoneNumber
    fax: OptionalPhone = None
    postal_code: PostalCode
    address: Address
    website: OptionalUrl = None
    business_categories: BusinessCategories = None
    notes: NoteText = None
    status: VendorStatus = VendorStatus.ACTIVE
