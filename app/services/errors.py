"""Typed failures raised by the service layer."""

from __future__ import annotations

from enum import Enum


class ValidationReason(str, Enum):
    BLANK = "blank"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    MISSING = "missing"
    DUPLICATE_REVIEW = "duplicate_review"


_MESSAGES = {
    ValidationReason.BLANK: "can't be blank",
    ValidationReason.TOO_SHORT: "is too short",
    ValidationReason.TOO_LONG: "is too long",
    ValidationReason.MISSING: "must exist",
    ValidationReason.DUPLICATE_REVIEW: "can only review a restaurant once",
}


class ValidationFailed(Exception):
    """Caller-correctable input problem on a single field."""

    def __init__(self, field: str, reason: ValidationReason) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field} {self.message}")

    @property
    def message(self) -> str:
        return _MESSAGES[self.reason]

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "reason": self.reason.value, "message": str(self)}


class NotFound(Exception):
    """Referenced record does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")
