from __future__ import annotations

from typing import Any


class NumericDomainError(ValueError):
    """A money computation received a value no caller should ever pass (NaN, inf)."""


class DocumentValidationError(ValueError):
    """A quote/invoice save was rejected.

    ``preview`` holds the figures the save would have written, so callers can
    still show them next to the errors.
    """

    def __init__(self, errors: list[str], preview: dict[str, Any] | None = None) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors
        self.preview = preview or {}


class InvalidTransitionError(ValueError):
    def __init__(self, document: str, current: str, target: str) -> None:
        super().__init__(f"Cannot move {document} from {current} to {target}")
        self.current = current
        self.target = target


class DocumentNotFoundError(LookupError):
    def __init__(self, document: str, uuid: str) -> None:
        super().__init__(f"{document} not found: {uuid}")
        self.document = document
        self.uuid = uuid
