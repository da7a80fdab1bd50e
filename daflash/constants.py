from decimal import Decimal
from enum import Enum
from zoneinfo import ZoneInfo

# Austin, TX. Dates like "due today" and "expired" are judged in this zone.
AGENCY_TZ = ZoneInfo("America/Chicago")

# Texas Tax Code 151.351: 20% of a data-processing charge is exempt.
DATA_PROCESSING_EXEMPTION_PERCENT = Decimal("20")
JURISDICTION_TAXABLE_SHARE = (Decimal("100") - DATA_PROCESSING_EXEMPTION_PERCENT) / Decimal("100")

DEFAULT_TAX_RATE = Decimal("8.25")


class DocumentKind(str, Enum):
    QUOTE = "quote"
    INVOICE = "invoice"

    @property
    def prefix(self) -> str:
        return NUMBER_PREFIXES[self]


NUMBER_PREFIXES = {DocumentKind.QUOTE: "Q", DocumentKind.INVOICE: "INV"}

NUMBER_PAD_WIDTH = 3
