from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from ulid import ULID

from daflash.tax import compute_item_total


def new_item_key() -> str:
    return str(ULID())


class LineItem(BaseModel):
    """One billable row of a quote or invoice.

    ``total`` is computed from the other fields on every access; a ``total``
    sent by a client or read back from storage is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    key: str = Field(default_factory=new_item_key)
    name: str = Field(min_length=1)
    description: str = ""
    quantity: int = Field(default=1, ge=1)
    unit_price: Decimal = Field(ge=0)
    discount_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    is_tax_exempt: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> Decimal:
        return compute_item_total(self.unit_price, self.quantity, self.discount_percent)

    @model_validator(mode="after")
    def _total_in_range(self) -> LineItem:
        # Out-of-range amounts fail here instead of on first serialization.
        compute_item_total(self.unit_price, self.quantity, self.discount_percent)
        return self
