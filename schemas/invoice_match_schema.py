from __future__ import annotations

from decimal import Decimal

from schemas.primitives import EntitySchema, Identifier, NonNegativeDecimal, optional

OptionalIdentifier = optional(Identifier)


class InvoiceMatchCriteria(EntitySchema):
    """Keys for matching an invoice against its purchase order.

    Tolerances are absolute variances; zero demands an exact match. When
    ``receiving_id`` is given the match is three-way.
    """

    invoice_id: Identifier
    purchase_order_id: Identifier
    receiving_id: OptionalIdentifier = None
    price_variance_tolerance: NonNegativeDecimal = Decimal("0")
    quantity_variance_tolerance: NonNegativeDecimal = Decimal("0")
