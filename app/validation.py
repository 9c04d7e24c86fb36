from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ValidationError

from app.registry import DEFAULT_REGISTRY, EntityKind, SchemaRegistry

ROOT_FIELD = "__root__"


class ErrorKind(str, Enum):
    MISSING_FIELD = "MissingField"
    FORMAT_MISMATCH = "FormatMismatch"
    RANGE_VIOLATION = "RangeViolation"
    ENUM_MISMATCH = "EnumMismatch"


_MISSING_TYPES = frozenset({"missing", "value_required"})
_RANGE_TYPES = frozenset(
    {
        "greater_than",
        "greater_than_equal",
        "less_than",
        "less_than_equal",
        "multiple_of",
        "string_too_short",
        "string_too_long",
        "too_short",
        "too_long",
        "date_in_future",
    }
)
_ENUM_TYPES = frozenset({"enum", "literal_error"})


def classify_error_type(error_type: str) -> ErrorKind:
    if error_type in _MISSING_TYPES:
        return ErrorKind.MISSING_FIELD
    if error_type in _RANGE_TYPES:
        return ErrorKind.RANGE_VIOLATION
    if error_type in _ENUM_TYPES:
        return ErrorKind.ENUM_MISMATCH
    return ErrorKind.FORMAT_MISMATCH


@dataclass(frozen=True)
class FieldError:
    field: str
    kind: ErrorKind
    message: str
    code: str

    def as_dict(self) -> dict[str, str]:
        return {
            "field": self.field,
            "kind": self.kind.value,
            "message": self.message,
            "code": self.code,
        }


@dataclass(frozen=True)
class ValidationResult:
    entity_kind: str
    value: BaseModel | None = None
    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def error_map(self) -> dict[str, list[str]]:
        """Group messages by field path, in the order the errors were reported."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


def field_path(loc: tuple[int | str, ...]) -> str:
    if not loc:
        return ROOT_FIELD
    return ".".join(str(part) for part in loc)


def to_field_errors(exc: ValidationError) -> tuple[FieldError, ...]:
    return tuple(
        FieldError(
            field=field_path(tuple(error["loc"])),
            kind=classify_error_type(error["type"]),
            message=error["msg"],
            code=error["type"],
        )
        for error in exc.errors(include_url=False)
    )


def current_date(timezone_name: str | None = None) -> date:
    if timezone_name is None:
        return date.today()
    return datetime.now(ZoneInfo(timezone_name)).date()


def validate(
    kind: str | EntityKind,
    candidate: Any,
    *,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
    today: date | None = None,
    require_https: bool = False,
) -> ValidationResult:
    """Validate ``candidate`` against the schema registered for ``kind``.

    Malformed input is reported through ``ValidationResult.errors`` and never
    raised. An unknown ``kind`` raises ``UnknownEntityKindError``.
    """
    name = registry.resolve(kind)
    schema = registry.schema_for(name)
    context = {
        "today": today if today is not None else current_date(),
        "require_https": require_https,
    }
    try:
        value = schema.model_validate(candidate, context=context)
    except ValidationError as exc:
        return ValidationResult(entity_kind=name, errors=to_field_errors(exc))
    return ValidationResult(entity_kind=name, value=value)
