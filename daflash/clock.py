from datetime import date, datetime

from daflash.constants import AGENCY_TZ


def now() -> datetime:
    return datetime.now(AGENCY_TZ)


def today() -> date:
    return now().date()
