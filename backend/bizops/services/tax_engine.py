"""
Tax Engine — discount and VAT resolution for one line.

Every document type (invoice, quote, credit note, purchase order, bill) and
every report resolves its lines through `resolve_line`, so the three tax
modes behave identically everywhere:

    inclusive : price includes VAT  → exclusive = after / (1 + r/100)
    exclusive : price excludes VAT  → vat = after × r/100, added on top
    none      : no VAT

Amounts are unrounded floats; rounding is a display concern.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from bizops.models.pricing_schema import Discount, DiscountType, TaxMode

logger = logging.getLogger("bizops-tax")


@dataclass(frozen=True)
class LineResult:
    base_price: float = 0.0
    discount_amount: float = 0.0
    price_after_discount: float = 0.0
    exclusive_amount: float = 0.0
    vat_amount: float = 0.0
    line_total: float = 0.0


def _finite(value: float, label: str) -> float:
    if math.isfinite(value):
        return value
    logger.warning("non-finite %s collapsed to 0", label)
    return 0.0


def discount_amount(base_price: float, discount: Optional[Discount]) -> float:
    """Percentage discounts scale the base price; fixed discounts are taken as-is."""
    if discount is None:
        return 0.0
    if discount.type == DiscountType.PERCENTAGE:
        return base_price * (discount.value / 100.0)
    return discount.value


def resolve_line(
    base_price: float,
    discount: Optional[Discount],
    vat_rate: float,
    tax_mode: TaxMode,
) -> LineResult:
    """
    Apply discount then tax mode to a line's base price.

    A fixed discount larger than the base price gives a negative
    price_after_discount; it flows through every tax mode unclamped.
    """
    base_price = _finite(base_price or 0.0, "base price")
    vat_rate = vat_rate or 0.0
    discount_value = _finite(discount_amount(base_price, discount), "discount")
    after = base_price - discount_value

    tax_mode = TaxMode(tax_mode)
    if tax_mode == TaxMode.INCLUSIVE:
        divisor = 1.0 + vat_rate / 100.0
        if divisor == 0:
            logger.warning("inclusive VAT divisor is zero (vat_rate=%s); VAT not extracted", vat_rate)
            exclusive = 0.0
            vat = 0.0
        else:
            exclusive = _finite(after / divisor, "exclusive amount")
            vat = after - exclusive
        total = after
    elif tax_mode == TaxMode.EXCLUSIVE:
        exclusive = after
        vat = _finite(after * (vat_rate / 100.0), "VAT amount")
        total = after + vat
    else:
        exclusive = after
        vat = 0.0
        total = after

    return LineResult(
        base_price=base_price,
        discount_amount=discount_value,
        price_after_discount=after,
        exclusive_amount=exclusive,
        vat_amount=vat,
        line_total=total,
    )


def resolve_purchase_line(
    quantity: float,
    unit_price: float,
    vat_rate: float,
    tax_mode: TaxMode,
) -> LineResult:
    """Purchase lines carry no discount: base = quantity × unit_price."""
    return resolve_line((quantity or 0.0) * (unit_price or 0.0), None, vat_rate, tax_mode)
