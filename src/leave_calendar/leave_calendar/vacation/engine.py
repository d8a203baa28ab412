"""Vacation splitting validation.

The engine is a pure function of its inputs: it receives the employee's leave
history by value, never touches storage and keeps no state between calls, so
one instance can be shared by every request thread.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveType
from ..leaves.model import LeaveRecord
from .policy import VacationPolicy
from .result import ValidationResult
from .rules.base import SplitContext, VacationRule
from .rules.cap_rule import AnnualCapRule
from .rules.long_split_rule import LongSplitRule
from .rules.min_split_rule import MinimumSplitRule

logger = logging.getLogger(__name__)

# Evaluation order is observable: the first failing rule decides the message.
DEFAULT_RULES: tuple[VacationRule, ...] = (AnnualCapRule(), MinimumSplitRule(), LongSplitRule())


class VacationRuleEngine:
    def __init__(self, policy: Optional[VacationPolicy] = None, *, rules: Optional[Sequence[VacationRule]] = None):
        self._policy = policy or VacationPolicy()
        self._rules = tuple(rules) if rules is not None else DEFAULT_RULES

    @property
    def policy(self) -> VacationPolicy:
        return self._policy

    @staticmethod
    def prior_vacations(
        existing_leaves: Iterable[LeaveRecord],
        employee_id: str,
        acquisitive_period_start: str,
    ) -> list[LeaveRecord]:
        """Vacations of this employee drawn from the same acquisitive period."""

        return [
            leave
            for leave in existing_leaves
            if leave.employee_id == employee_id
            and leave.type == LeaveType.VACATION
            and leave.acquisitive_period_start == acquisitive_period_start
        ]

    def validate(
        self,
        existing_leaves: Iterable[LeaveRecord],
        employee_id: str,
        requested_days: int,
        acquisitive_period_start: str,
    ) -> ValidationResult:
        prior = self.prior_vacations(existing_leaves, employee_id, acquisitive_period_start)
        ctx = SplitContext(prior_days=tuple(leave.days_off for leave in prior), requested_days=requested_days)

        for rule in self._rules:
            result = rule.check(ctx, self._policy)
            if result is not None:
                logger.debug(
                    "vacation rejected employee=%s period=%s requested=%s taken=%s violation=%s",
                    employee_id,
                    acquisitive_period_start,
                    requested_days,
                    ctx.total_taken,
                    result.violation.value if result.violation else None,
                )
                return result
        return ValidationResult.ok()

    def remaining_days(
        self,
        existing_leaves: Iterable[LeaveRecord],
        employee_id: str,
        acquisitive_period_start: str,
    ) -> int:
        prior = self.prior_vacations(existing_leaves, employee_id, acquisitive_period_start)
        return max(0, self._policy.annual_cap_days - sum(leave.days_off for leave in prior))


def validate_vacation_rule(
    existing_leaves: Iterable[LeaveRecord],
    employee_id: str,
    requested_days: int,
    acquisitive_period_start: str,
    *,
    policy: Optional[VacationPolicy] = None,
) -> ValidationResult:
    """One-shot validation; uses the CLT defaults unless a policy is given."""

    return VacationRuleEngine(policy).validate(existing_leaves, employee_id, requested_days, acquisitive_period_start)
