"""Payday calendar arithmetic"""

from datetime import date, timedelta

from kora_engine.domain.exceptions import InvalidArgumentError
from kora_engine.utils.date_utils import DateLike, as_date, clamp_day, next_month


def validate_payday_day(payday_day) -> int:
    """Return payday_day if it is an int in 1-31, else raise InvalidArgumentError"""
    if payday_day is None:
        raise InvalidArgumentError("Payday is not configured")
    if isinstance(payday_day, bool) or not isinstance(payday_day, int):
        raise InvalidArgumentError(f"Payday must be an integer day of month, got {payday_day!r}")
    if not 1 <= payday_day <= 31:
        raise InvalidArgumentError(f"Payday must be between 1 and 31, got {payday_day}")
    return payday_day


def next_payday_date(today: DateLike, payday_day: int) -> date:
    """
    Date of the next payday, counting today when today is payday.

    Mirrors days_to_payday: a payday still ahead this month is payday_day
    minus today's day, even when the month is shorter than payday_day
    (2025-02-26 with payday 31 -> 2025-03-03). Only the next-month
    candidate is clamped to that month's last day.

    Example:
        today=2025-01-31, payday_day=30 -> 2025-02-28
    """
    current = as_date(today)
    return current + timedelta(days=days_to_payday(current, payday_day))


def days_to_payday(today: DateLike, payday_day: int) -> int:
    """
    Whole days until the next payday (0 when today is payday).

    - today's day < payday_day: payday_day - today's day
    - today's day > payday_day: days until payday_day next month, clamped
      to that month's last day (Jan 31 -> Feb 28, never March)

    A datetime `today` is reduced to its calendar date: the ceiling of
    (midnight payday - now) equals the difference in calendar days.
    """
    validate_payday_day(payday_day)
    current = as_date(today)

    if current.day <= payday_day:
        return payday_day - current.day

    year, month = next_month(current.year, current.month)
    return (clamp_day(year, month, payday_day) - current).days
