"""Financial state engine - safe spend, upcoming bills and flexible budget"""

import math
from typing import Iterable, Optional, Sequence

from kora_engine.domain.models import (
    FinancialContext,
    FinancialState,
    FixedExpense,
    Transaction,
)
from kora_engine.domain.payday import days_to_payday, validate_payday_day
from kora_engine.utils.date_utils import DateLike, as_date


def total_fixed_expenses(expenses: Iterable[FixedExpense]) -> float:
    """Sum of all fixed expense amounts (0 for no expenses)"""
    return sum((e.amount for e in expenses), 0)


def flexible_income(income: Optional[float], total_fixed: float) -> float:
    """Monthly income left after fixed expenses; unset income counts as 0"""
    return (income or 0) - total_fixed


def upcoming_bills(expenses: Iterable[FixedExpense], today: DateLike, payday_day: int) -> float:
    """
    Sum of fixed expenses due strictly between today and the next payday.

    Window:
    - Payday still ahead this month: current_day < due_day < payday_day
    - Payday passed (or is today): due_day > current_day (rest of this month)
      or due_day < payday_day (early next month)

    Bills due exactly today or on payday are never reserved. Expenses without
    a due_day cannot be scheduled and are skipped.
    """
    validate_payday_day(payday_day)
    current_day = as_date(today).day

    total = 0
    for expense in expenses:
        if expense.due_day is None:
            continue

        if current_day < payday_day:
            if current_day < expense.due_day < payday_day:
                total += expense.amount
        elif expense.due_day > current_day or expense.due_day < payday_day:
            total += expense.amount

    return total


def safe_spend_today(
    balance: float,
    expenses: Sequence[FixedExpense],
    today: DateLike,
    payday_day: int,
) -> float:
    """
    Maximum amount that can be spent today without endangering bills due before payday.

    Formula: floor((balance - upcoming bills) / days to payday)

    - days_to_payday <= 1: the whole balance is returned untouched
    - reserved balance <= 0: 0, never a negative suggestion
    - always rounded down so rounding can't authorize overspending
    """
    days = days_to_payday(today, payday_day)
    if days <= 1:
        return balance

    effective_balance = balance - upcoming_bills(expenses, today, payday_day)
    if effective_balance <= 0:
        return 0

    return math.floor(effective_balance / days)


def flexible_remaining(income: float, total_fixed: float, spent_this_month: float) -> float:
    """Flexible budget left this month. Negative means already overspent (not clamped)."""
    return income - total_fixed - spent_this_month


def spent_on(transactions: Iterable[Transaction], day: DateLike) -> float:
    """Total spend on a calendar day"""
    target = as_date(day)
    return sum((t.amount for t in transactions if as_date(t.date) == target), 0)


def spent_in_month(transactions: Iterable[Transaction], today: DateLike) -> float:
    """Total spend in the calendar month of today, up to and including today"""
    current = as_date(today)
    month_start = current.replace(day=1)
    return sum(
        (t.amount for t in transactions if month_start <= as_date(t.date) <= current),
        0,
    )


def calculate_financial_state(context: FinancialContext, today: DateLike) -> FinancialState:
    """
    Main entry point: derive every figure from one profile snapshot and one 'today'.

    Payday distance and the upcoming-bills window are both computed from the
    same date so they always agree on whether payday has passed.

    Raises:
        InvalidArgumentError: payday not configured or outside 1-31
    """
    profile = context.profile
    payday = validate_payday_day(profile.payday)
    current = as_date(today)

    expenses = profile.fixed_expenses
    total_fixed = total_fixed_expenses(expenses)
    flexible = flexible_income(profile.income, total_fixed)
    spent_this_month = spent_in_month(context.transactions, current)

    return FinancialState(
        current_balance=profile.current_balance,
        payday=payday,
        total_fixed_expenses=total_fixed,
        flexible_income=flexible,
        days_to_payday=days_to_payday(current, payday),
        upcoming_bills=upcoming_bills(expenses, current, payday),
        safe_spend_today=safe_spend_today(profile.current_balance, expenses, current, payday),
        spent_today=spent_on(context.transactions, current),
        spent_this_month=spent_this_month,
        flexible_remaining=flexible_remaining(profile.income or 0, total_fixed, spent_this_month),
    )

