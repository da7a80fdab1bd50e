"""Line-item totals and tax aggregation.

Texas taxes data-processing services on 80% of the charge
(Tax Code 151.351), which the jurisdiction exemption toggle models as a flat
multiplier on every taxable, non-exempt item.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

from daflash.constants import JURISDICTION_TAXABLE_SHARE
from daflash.models.tax import TaxConfiguration, TaxResult
from daflash.money import ZERO, round2, to_decimal

if TYPE_CHECKING:
    from daflash.models.line_item import LineItem

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
ONE = Decimal("1")


def compute_item_total(
    unit_price: Decimal | int | float | str,
    quantity: Decimal | int | float | str,
    discount_percent: Decimal | int | float | str = 0,
) -> Decimal:
    """Post-discount total of one line item.

    Out-of-range inputs are clamped: quantity below 1 becomes 1, a negative
    price becomes 0 and the discount is held to [0, 100]. Non-finite input
    raises :class:`~daflash.errors.NumericDomainError`.
    """
    price = max(to_decimal(unit_price), ZERO)
    qty = to_decimal(quantity)
    if qty < ONE:
        qty = ONE
    discount = min(max(to_decimal(discount_percent), ZERO), HUNDRED)
    return round2(price * qty * (ONE - discount / HUNDRED))


def exemption_multiplier(config: TaxConfiguration) -> Decimal:
    return JURISDICTION_TAXABLE_SHARE if config.jurisdiction_exemption_enabled else ONE


def compute_tax(items: Iterable[LineItem], config: TaxConfiguration) -> TaxResult:
    """Reduce ``items`` to subtotal, taxable base, tax and grand total.

    Item totals are recomputed here rather than read from the items.
    """
    multiplier = exemption_multiplier(config)

    subtotal = ZERO
    gross_total = ZERO
    taxable = ZERO
    exempt = ZERO
    for item in items:
        total = compute_item_total(item.unit_price, item.quantity, item.discount_percent)
        subtotal += total
        gross_total += max(to_decimal(item.unit_price), ZERO) * max(item.quantity, 1)
        if config.tax_enabled and not item.is_tax_exempt:
            taxable += total * multiplier
            exempt += total * (ONE - multiplier)

    subtotal = round2(subtotal)
    taxable_amount = round2(taxable)
    if config.tax_enabled:
        tax_amount = round2(taxable_amount * config.tax_rate_percent / HUNDRED)
    else:
        tax_amount = round2(ZERO)
    grand_total = round2(subtotal + tax_amount)

    if subtotal > ZERO:
        effective_rate = round2(tax_amount / subtotal * HUNDRED)
    else:
        effective_rate = round2(ZERO)

    return TaxResult(
        subtotal=subtotal,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        grand_total=grand_total,
        discount_total=round2(gross_total - subtotal),
        effective_tax_rate=effective_rate,
        exempt_amount=round2(exempt),
    )
