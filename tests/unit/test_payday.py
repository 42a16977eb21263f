"""Unit tests for payday calendar arithmetic"""

import pytest
from datetime import date, datetime
from kora_engine.domain.payday import days_to_payday, next_payday_date, validate_payday_day
from kora_engine.domain.exceptions import InvalidArgumentError


def test_days_to_payday_later_this_month():
    """Payday ahead this month is a plain difference of days"""
    assert days_to_payday(date(2025, 6, 12), 21) == 9
    assert days_to_payday(date(2025, 6, 20), 21) == 1


@pytest.mark.parametrize("payday", range(1, 29))
def test_days_to_payday_zero_on_payday(payday):
    """Today is payday -> 0 days, for every day a month always has"""
    assert days_to_payday(date(2025, 3, payday), payday) == 0


def test_days_to_payday_zero_on_31st():
    assert days_to_payday(date(2025, 1, 31), 31) == 0


def test_next_payday_clamps_to_end_of_february():
    """Jan 31 with a 30th payday must land on Feb 28, not roll into March"""
    assert next_payday_date(date(2025, 1, 31), 30) == date(2025, 2, 28)
    assert days_to_payday(date(2025, 1, 31), 30) == 28


def test_next_payday_clamps_to_leap_day():
    assert next_payday_date(date(2024, 1, 31), 30) == date(2024, 2, 29)
    assert days_to_payday(date(2024, 1, 31), 30) == 29


def test_payday_on_31st_in_short_month():
    """A 31st payday still ahead this month is a plain difference, even in February"""
    assert days_to_payday(date(2025, 2, 26), 31) == 5
    assert days_to_payday(date(2025, 2, 28), 31) == 3
    assert days_to_payday(date(2025, 4, 30), 31) == 1
    assert next_payday_date(date(2025, 2, 26), 31) == date(2025, 3, 3)


def test_next_month_candidate_is_clamped():
    """Only the next-month payday is pulled back to the month's last day"""
    assert next_payday_date(date(2025, 3, 31), 30) == date(2025, 4, 30)
    assert days_to_payday(date(2025, 3, 31), 30) == 30


def test_days_to_payday_wraps_year():
    """Payday passed in December -> January of next year"""
    assert next_payday_date(date(2025, 12, 26), 25) == date(2026, 1, 25)
    assert days_to_payday(date(2025, 12, 26), 25) == 30


def test_days_to_payday_after_payday_this_month():
    assert days_to_payday(date(2025, 6, 26), 25) == 29  # 25 July


def test_days_to_payday_accepts_datetime():
    """Time of day doesn't change the count"""
    assert days_to_payday(datetime(2025, 6, 12, 23, 59), 21) == 9
    assert days_to_payday(datetime(2025, 6, 21, 8, 0), 21) == 0


@pytest.mark.parametrize("payday", [0, 32, -1, None, True, 1.5, "15"])
def test_invalid_payday_raises(payday):
    with pytest.raises(InvalidArgumentError):
        days_to_payday(date(2025, 6, 12), payday)


def test_validate_payday_day_returns_value():
    assert validate_payday_day(1) == 1
    assert validate_payday_day(31) == 31


@pytest.mark.parametrize("payday", range(1, 32))
def test_days_to_payday_never_negative(payday):
    for day in (1, 15, 28, 30, 31):
        assert days_to_payday(date(2025, 1, day), payday) >= 0
