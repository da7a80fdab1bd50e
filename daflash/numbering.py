"""Human-readable document numbers (``Q-001``, ``INV-042``).

Scan mode derives the next number from the highest existing one. It does a
read-then-write with no guard, so two concurrent creations can be handed
the same number. Counter mode (``DAFLASH_NUMBERING_MODE=counter``) draws
from an atomically incremented row instead.
"""

from __future__ import annotations

import logging
import re

from daflash.constants import NUMBER_PAD_WIDTH, DocumentKind
from daflash.repositories.base import NumberCounterRepository, NumberSource

logger = logging.getLogger(__name__)

_TRAILING_DIGITS = re.compile(r"(\d+)$")

SCAN = "scan"
COUNTER = "counter"
NUMBERING_MODES = (SCAN, COUNTER)


def format_number(prefix: str, value: int) -> str:
    return f"{prefix}-{value:0{NUMBER_PAD_WIDTH}d}"


def parse_number(existing: str | None) -> int | None:
    """Trailing digit run of ``existing`` as an int, or None when there is none."""
    if not existing:
        return None
    match = _TRAILING_DIGITS.search(existing.strip())
    if match is None:
        return None
    return int(match.group(1))


def next_number(existing_max: str | None, prefix: str) -> str:
    """Number following ``existing_max``; ``{prefix}-001`` when there is nothing to follow."""
    current = parse_number(existing_max)
    if current is None:
        return format_number(prefix, 1)
    return format_number(prefix, current + 1)


class NumberAllocator:
    def __init__(
        self,
        source: NumberSource,
        counters: NumberCounterRepository | None = None,
        mode: str = SCAN,
    ) -> None:
        if mode not in NUMBERING_MODES:
            raise ValueError(f"Unknown numbering mode: {mode}")
        if mode == COUNTER and counters is None:
            raise ValueError("Counter numbering needs a counter repository")
        self.source = source
        self.counters = counters
        self.mode = mode

    def allocate(self, kind: DocumentKind) -> str:
        if self.mode == COUNTER:
            return self._allocate_from_counter(kind)
        return self._allocate_from_scan(kind)

    def _latest(self, kind: DocumentKind) -> str | None:
        try:
            return self.source.latest_number(kind)
        except Exception:
            logger.warning("Could not read latest %s number, starting from 001", kind.value, exc_info=True)
            return None

    def _allocate_from_scan(self, kind: DocumentKind) -> str:
        latest = self._latest(kind)
        number = next_number(latest, kind.prefix)
        if latest is not None and parse_number(latest) is None:
            logger.warning("Unparsable %s number %r, falling back to %s", kind.value, latest, number)
        logger.debug("Allocated %s number %s (scan, latest=%s)", kind.value, number, latest)
        return number

    def _allocate_from_counter(self, kind: DocumentKind) -> str:
        assert self.counters is not None
        value = self.counters.increment(kind.value)
        if value is None:
            seed = parse_number(self._latest(kind)) or 0
            self.counters.ensure(kind.value, seed)
            logger.info("Seeded %s counter at %d", kind.value, seed)
            value = self.counters.increment(kind.value)
            if value is None:
                raise RuntimeError(f"Counter for {kind.value} missing after seeding")
        number = format_number(kind.prefix, value)
        logger.debug("Allocated %s number %s (counter)", kind.value, number)
        return number
