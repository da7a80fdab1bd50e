from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from daflash.models.line_item import LineItem


class BillingType(str, Enum):
    ONE_TIME = "one-time"
    MONTHLY = "monthly"
    ANNUAL = "annual"

    @property
    def is_recurring(self) -> bool:
        return self is not BillingType.ONE_TIME


class CatalogItemInput(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    unit_price: Decimal = Field(ge=0, decimal_places=2)
    billing_type: BillingType = BillingType.ONE_TIME
    category: str = ""


class CatalogItem(CatalogItemInput):
    id: int | None = None
    uuid: str = ""
    created_at: datetime | None = None

    def to_line_item(self) -> LineItem:
        """Copy this entry into a fresh line item; later catalog edits don't reach it."""
        return LineItem(
            name=self.name,
            description=self.description,
            unit_price=self.unit_price,
        )
