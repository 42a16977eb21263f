"""Proactive alert decision table

Each producer returns an AlertMessage or None and never raises. Scheduling,
delivery and de-duplication of repeated firings belong to the caller.
"""

from datetime import datetime
from typing import Optional, Tuple

from kora_engine.domain.models import AlertMessage, AlertPolicy, FinancialState, SpendingPattern
from kora_engine.domain.patterns import weekday_name

DANGER_ZONE = "danger_zone"
WEEKEND_WARNING = "weekend_warning"
PAYDAY_CHECKIN = "payday_checkin"
LIMIT_FOLLOWUP = "limit_followup"


def _in_window(hour: int, window: Tuple[int, int]) -> bool:
    start, end = window
    return start <= hour < end


def danger_zone_alert(state: FinancialState, policy: AlertPolicy = AlertPolicy()) -> Optional[AlertMessage]:
    """Few days to payday and a thin daily allowance"""
    if state.days_to_payday > policy.danger_zone_max_days:
        return None
    if state.safe_spend_today >= policy.danger_zone_safe_spend_threshold:
        return None

    return AlertMessage(
        type=DANGER_ZONE,
        title="Heads Up",
        data={
            "balance": state.current_balance,
            "daysToPayday": state.days_to_payday,
            "safeSpendToday": state.safe_spend_today,
        },
    )


def weekend_warning_alert(
    pattern: SpendingPattern,
    state: FinancialState,
    now: datetime,
    policy: AlertPolicy = AlertPolicy(),
) -> Optional[AlertMessage]:
    """Friday evening nudge for users whose weekends run hot"""
    if weekday_name(now) != "Friday" or not _in_window(now.hour, policy.weekend_warning_hours):
        return None
    if "weekend_spending" not in pattern.overspend_triggers:
        return None

    weekend_days = min(policy.weekend_max_days, state.days_to_payday)
    return AlertMessage(
        type=WEEKEND_WARNING,
        title="Weekend Check-in",
        data={
            "suggestedLimit": state.safe_spend_today * weekend_days,
            "daysToPayday": state.days_to_payday,
        },
    )


def payday_checkin_alert(
    state: FinancialState,
    income: Optional[float],
    now: datetime,
    policy: AlertPolicy = AlertPolicy(),
) -> Optional[AlertMessage]:
    """
    Payday morning: show the flexible money for the month ahead.

    Fires only when the day of month equals the configured payday, the same
    day days_to_payday reports 0. A 31st payday therefore skips shorter months.
    """
    if now.day != state.payday or not _in_window(now.hour, policy.payday_checkin_hours):
        return None

    return AlertMessage(
        type=PAYDAY_CHECKIN,
        title="Payday!",
        data={
            "flexibleIncome": state.flexible_income,
            "income": income or 0,
            "fixedExpenses": state.total_fixed_expenses,
        },
    )


def limit_followup_alert(limit_amount: float, actual_spent: float) -> AlertMessage:
    """Follow-up on a limit the user set earlier; spending exactly the limit counts as under"""
    over_under = actual_spent - limit_amount
    return AlertMessage(
        type=LIMIT_FOLLOWUP,
        title="Limit Check-in",
        data={
            "limitAmount": limit_amount,
            "actualSpent": actual_spent,
            "overUnder": over_under,
            "wasUnder": over_under <= 0,
        },
    )


def select_proactive_alert(
    pattern: SpendingPattern,
    state: FinancialState,
    income: Optional[float],
    now: datetime,
    policy: AlertPolicy = AlertPolicy(),
) -> Optional[AlertMessage]:
    """
    Surface at most one alert for right now.

    Priority: danger_zone > weekend_warning > payday_checkin. Limit follow-ups
    are only produced on explicit request via limit_followup_alert.
    """
    return (
        danger_zone_alert(state, policy)
        or weekend_warning_alert(pattern, state, now, policy)
        or payday_checkin_alert(state, income, now, policy)
    )
