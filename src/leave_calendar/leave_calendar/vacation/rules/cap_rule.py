from __future__ import annotations

from typing import Optional

from ..policy import VacationPolicy
from ..result import ValidationResult, VacationViolation
from .base import SplitContext, VacationRule


class AnnualCapRule(VacationRule):
    """Total days in one acquisitive period may not exceed the cap."""

    def check(self, ctx: SplitContext, policy: VacationPolicy) -> Optional[ValidationResult]:
        if ctx.new_total <= policy.annual_cap_days:
            return None

        remaining = max(0, policy.annual_cap_days - ctx.total_taken)
        return ValidationResult.fail(
            VacationViolation.CAP_EXCEEDED,
            f"Limite de {policy.annual_cap_days} dias excedido. Saldo atual: {remaining} dias.",
        )
