"""Currency-safe arithmetic on :class:`~decimal.Decimal`.

Every monetary figure the application produces passes through :func:`round2`
exactly once, at the point where it is computed.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from daflash.errors import NumericDomainError

CENT = Decimal("0.01")
ZERO = Decimal("0")

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert ``value`` to ``Decimal``; floats go through ``str`` so ``0.1`` stays ``0.1``."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise NumericDomainError(f"Not a number: {value!r}")
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise NumericDomainError(f"Not a number: {value!r}") from exc
    if not result.is_finite():
        raise NumericDomainError(f"Non-finite amount: {value!r}")
    return result


def round2(value: Decimal | int | float | str) -> Decimal:
    """Round to cents, half away from zero (``2.675 -> 2.68``, ``-0.005 -> -0.01``)."""
    try:
        return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise NumericDomainError(f"Amount out of range: {value!r}") from exc


def to_cents(value: Decimal) -> int:
    return int(round2(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def format_usd(amount: Decimal | int | float) -> str:
    value = round2(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percentage(value: Decimal | int | float, decimals: int = 2) -> str:
    return f"{to_decimal(value):.{decimals}f}%"


def parse_currency(raw: str) -> Decimal:
    """Parse user-typed money (``"$1,250.00"``); anything unparsable is zero."""
    cleaned = _NON_NUMERIC.sub("", raw or "")
    try:
        result = Decimal(cleaned)
    except InvalidOperation:
        return ZERO
    return result if result.is_finite() else ZERO
