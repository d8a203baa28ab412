from __future__ import annotations

from datetime import date, datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 3, 9, 0, 0)


@pytest.fixture
def today(fixed_now) -> date:
    return fixed_now.date()
