from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from daflash.constants import DEFAULT_TAX_RATE


class TaxConfiguration(BaseModel):
    """Tax policy snapshot copied into each quote/invoice at save time."""

    model_config = ConfigDict(frozen=True)

    tax_enabled: bool = True
    tax_rate_percent: Decimal = Field(default=DEFAULT_TAX_RATE, ge=0, le=100)
    jurisdiction_exemption_enabled: bool = True


class TaxResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal = Decimal("0.00")
    taxable_amount: Decimal = Decimal("0.00")
    tax_amount: Decimal = Decimal("0.00")
    grand_total: Decimal = Decimal("0.00")
    discount_total: Decimal = Decimal("0.00")
    effective_tax_rate: Decimal = Decimal("0.00")
    exempt_amount: Decimal = Decimal("0.00")
