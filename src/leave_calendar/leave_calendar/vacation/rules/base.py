from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..policy import VacationPolicy
from ..result import ValidationResult


@dataclass(frozen=True)
class SplitContext:
    """Splits already taken in one acquisitive period plus the requested one."""

    prior_days: tuple[int, ...]
    requested_days: int

    @property
    def total_taken(self) -> int:
        return sum(self.prior_days)

    @property
    def new_total(self) -> int:
        return self.total_taken + self.requested_days

    @property
    def all_splits(self) -> tuple[int, ...]:
        return self.prior_days + (self.requested_days,)


class VacationRule(ABC):
    """Strategy Pattern: one statutory constraint on a vacation split."""

    @abstractmethod
    def check(self, ctx: SplitContext, policy: VacationPolicy) -> Optional[ValidationResult]:
        """Return a failed result when the rule is broken, None otherwise."""

        raise NotImplementedError
