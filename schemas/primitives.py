from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Annotated, Any, Optional
from urllib.parse import urlsplit

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    SecretStr,
    StringConstraints,
    ValidationInfo,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# Persistence columns are NUMERIC(18, 4).
DECIMAL_MAX_DIGITS = 18
DECIMAL_PLACES = 4
SMALLEST_POSITIVE = Decimal("0.0001")

IDENTIFIER_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_-]{0,49}$"
CODE_PATTERN = r"^[A-Za-z0-9_-]+$"
PHONE_PATTERN = r"^[0-9-]+$"
POSTAL_CODE_PATTERN = r"^\d{3}-\d{4}$|^\d{7}$"
KATAKANA_PATTERN = r"^[ァ-ヶー\s]+$"


class EntitySchema(BaseModel):
    """Base for every entity schema.

    Keys are accepted as snake_case field names (the form and backend shape) or
    in camelCase. Unknown keys are rejected and validated values are frozen.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


def _reject_blank(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("value_required", "Field required")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def required_text(
    min_length: int = 1,
    max_length: int | None = None,
    *,
    pattern: str | None = None,
    to_upper: bool = False,
    to_lower: bool = False,
) -> Any:
    return Annotated[
        str,
        StringConstraints(
            strip_whitespace=True,
            min_length=min_length,
            max_length=max_length,
            pattern=pattern,
            to_upper=to_upper,
            to_lower=to_lower,
        ),
        BeforeValidator(_reject_blank),
    ]


def optional(inner: Any) -> Any:
    """Blank strings and null both mean "not provided"."""
    return Annotated[Optional[inner], BeforeValidator(_blank_to_none)]


def optional_text(min_length: int = 1, max_length: int | None = None, **kwargs: Any) -> Any:
    return optional(required_text(min_length, max_length, **kwargs))


Identifier = required_text(1, 50, pattern=IDENTIFIER_PATTERN)
NoteText = optional_text(1, 1000)
AlphanumericCode = required_text(3, 20, pattern=CODE_PATTERN, to_upper=True)
PhoneNumber = required_text(10, 15, pattern=PHONE_PATTERN)
KatakanaText = required_text(1, 100, pattern=KATAKANA_PATTERN)


def _format_postal_code(value: str) -> str:
    if len(value) == 7 and "-" not in value:
        return f"{value[:3]}-{value[3:]}"
    return value


PostalCode = Annotated[
    required_text(pattern=POSTAL_CODE_PATTERN),
    AfterValidator(_format_postal_code),
]


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _lower(value: str) -> str:
    return value.lower()


# Before validators run last-declared first: blank check, strip, then EmailStr.
EmailAddress = Annotated[EmailStr, BeforeValidator(_strip), BeforeValidator(_reject_blank)]
Email = Annotated[EmailAddress, AfterValidator(_lower)]


def _check_secure_url(value: str, info: ValidationInfo) -> str:
    parts = urlsplit(value)
    if parts.scheme not in {"http", "https"} or not parts.netloc or re.search(r"\s", value):
        raise PydanticCustomError("url_format", "Enter a valid http(s) URL")
    context = info.context or {}
    if context.get("require_https") and parts.scheme != "https":
        raise PydanticCustomError("url_scheme", "Only https URLs are accepted in production")
    return value


SecureUrl = Annotated[required_text(10, 255), AfterValidator(_check_secure_url)]

PositiveDecimal = Annotated[
    Decimal,
    Field(gt=0, max_digits=DECIMAL_MAX_DIGITS, decimal_places=DECIMAL_PLACES),
    BeforeValidator(_reject_blank),
]
NonNegativeDecimal = Annotated[
    Decimal,
    Field(ge=0, max_digits=DECIMAL_MAX_DIGITS, decimal_places=DECIMAL_PLACES),
    BeforeValidator(_reject_blank),
]


def _context_today(info: ValidationInfo) -> date:
    context = info.context or {}
    today = context.get("today")
    if isinstance(today, date):
        return today
    return date.today()


def _not_in_future(value: date, info: ValidationInfo) -> date:
    today = _context_today(info)
    if value > today:
        raise PydanticCustomError(
            "date_in_future",
            "Date must not be later than {today}",
            {"today": today.isoformat()},
        )
    return value


def _date_input(value: Any) -> Any:
    # Numbers would otherwise be read as Unix timestamps.
    if not isinstance(value, (str, date)):
        raise PydanticCustomError("date_type", "Enter a date as YYYY-MM-DD")
    return value


PastOrPresentDate = Annotated[
    date,
    AfterValidator(_not_in_future),
    BeforeValidator(_date_input),
    BeforeValidator(_reject_blank),
]


def secret_text(min_length: int, max_length: int) -> Any:
    return Annotated[
        SecretStr,
        Field(min_length=min_length, max_length=max_length),
        BeforeValidator(_reject_blank),
    ]
