from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class VacationViolation(str, Enum):
    CAP_EXCEEDED = "CAP_EXCEEDED"
    SPLIT_TOO_SHORT = "SPLIT_TOO_SHORT"
    MISSING_LONG_SPLIT = "MISSING_LONG_SPLIT"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a vacation validation.

    `message` is meant to be shown to the end user verbatim.
    """

    valid: bool
    message: Optional[str] = None
    violation: Optional[VacationViolation] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, violation: VacationViolation, message: str) -> "ValidationResult":
        return cls(valid=False, message=message, violation=violation)
