from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field
from pydantic_core import PydanticCustomError

from schemas.primitives import (
    EntitySchema,
    Identifier,
    NonNegativeDecimal,
    PastOrPresentDate,
    PositiveDecimal,
)


class ReceivingLineItem(EntitySchema):
    item_id: Identifier
    quantity: PositiveDecimal
    unit_price: NonNegativeDecimal


def _require_line_items(value: Any) -> Any:
    # Checked on the raw input so a single invalid item is not also reported
    # as an empty sequence.
    if value is None:
        raise PydanticCustomError("value_required", "Field required")
    if isinstance(value, (list, tuple)) and not value:
        raise PydanticCustomError("too_short", "At least one line item is required")
    return value


LineItems = Annotated[
    tuple[ReceivingLineItem, ...],
    Field(json_schema_extra={"minItems": 1}),
    BeforeValidator(_require_line_items),
]


class ReceivingRecord(EntitySchema):
    po_ref: Identifier
    quantity: PositiveDecimal
    received_date: PastOrPresentDate = Field(alias="date")
    line_items: LineItems
