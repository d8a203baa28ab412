from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_ANNUAL_CAP_DAYS, DEFAULT_LONG_SPLIT_DAYS, DEFAULT_MIN_SPLIT_DAYS


@dataclass(frozen=True)
class VacationPolicy:
    """Vacation splitting thresholds.

    Defaults reproduce the CLT rules: 30 days per acquisitive period, no split
    shorter than 5 days, and at least one split of 14 days or more.
    """

    annual_cap_days: int = DEFAULT_ANNUAL_CAP_DAYS
    min_split_days: int = DEFAULT_MIN_SPLIT_DAYS
    long_split_days: int = DEFAULT_LONG_SPLIT_DAYS

    def __post_init__(self) -> None:
        for name in ("annual_cap_days", "min_split_days", "long_split_days"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.long_split_days > self.annual_cap_days:
            raise ValueError("long_split_days cannot exceed annual_cap_days")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "VacationPolicy":
        """Build a policy from settings; missing keys keep their defaults."""

        if not data:
            return cls()
        known = {k: int(v) for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
