from __future__ import annotations

from typing import Optional

from ..policy import VacationPolicy
from ..result import ValidationResult, VacationViolation
from .base import SplitContext, VacationRule


class MinimumSplitRule(VacationRule):
    """No single split may be shorter than the minimum."""

    def check(self, ctx: SplitContext, policy: VacationPolicy) -> Optional[ValidationResult]:
        if ctx.requested_days >= policy.min_split_days:
            return None

        return ValidationResult.fail(
            VacationViolation.SPLIT_TOO_SHORT,
            f"Nenhum período de férias pode ser inferior a {policy.min_split_days} dias corridos (CLT).",
        )
