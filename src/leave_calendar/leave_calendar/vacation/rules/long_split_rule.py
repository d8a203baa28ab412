from __future__ import annotations

from typing import Optional

from ..policy import VacationPolicy
from ..result import ValidationResult, VacationViolation
from .base import SplitContext, VacationRule


class LongSplitRule(VacationRule):
    """Once the allotment is used up, one split must be a long one.

    Partial allotments pass: the long split may still come later.
    """

    def check(self, ctx: SplitContext, policy: VacationPolicy) -> Optional[ValidationResult]:
        if ctx.new_total < policy.annual_cap_days:
            return None
        if any(days >= policy.long_split_days for days in ctx.all_splits):
            return None

        return ValidationResult.fail(
            VacationViolation.MISSING_LONG_SPLIT,
            f"Pelo menos um dos períodos de férias deve ter {policy.long_split_days} dias ou mais (CLT).",
        )
