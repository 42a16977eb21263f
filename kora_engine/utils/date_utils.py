"""Date manipulation utilities"""

import calendar
from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime]


def as_date(moment: DateLike) -> date:
    """Calendar date of a date or datetime (datetime is a subclass of date)"""
    if isinstance(moment, datetime):
        return moment.date()
    return moment


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Date for `day` in the given month, clamped to the month's last day (31 -> Feb 28/29)"""
    return date(year, month, min(day, days_in_month(year, month)))


def next_month(year: int, month: int) -> tuple[int, int]:
    """(year, month) of the following calendar month"""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def month_key(moment: DateLike) -> str:
    """YYYY-MM key of a date"""
    return f"{moment.year:04d}-{moment.month:02d}"
