"""Spending pattern analysis - weekday risk, top categories, risk score and streaks"""

from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from kora_engine.domain.models import (
    DEFAULT_PATTERN,
    AlertPolicy,
    CategoryTrend,
    FinancialState,
    RiskInputs,
    SpendingPattern,
    Transaction,
)
from kora_engine.utils.date_utils import DateLike, as_date

# Sunday-first to match how users talk about their week
DAYS_OF_WEEK = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

# Friday counts as weekend for risk purposes
WEEKEND_DAYS = ("Friday", "Saturday", "Sunday")

MIN_TRANSACTIONS = 7
HIGH_RISK_DAY_MULTIPLIER = 1.3
WEEKEND_TRIGGER_MULTIPLIER = 1.5
TOP_CATEGORY_LIMIT = 5

BASE_RISK_SCORE = 50


class _Buckets(NamedTuple):
    by_weekday: Dict[str, Tuple[float, ...]]
    by_category: Dict[str, float]
    by_date: Dict[date, float]


def weekday_name(moment: DateLike) -> str:
    """Sunday..Saturday name of a date"""
    return DAYS_OF_WEEK[moment.isoweekday() % 7]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _bucket_transactions(transactions: Sequence[Transaction]) -> _Buckets:
    """Group amounts by weekday, category (first-seen order) and calendar date"""
    by_weekday: Dict[str, List[float]] = {day: [] for day in DAYS_OF_WEEK}
    by_category: Dict[str, float] = {}
    by_date: Dict[date, float] = {}

    for txn in transactions:
        by_weekday[weekday_name(txn.date)].append(txn.amount)
        by_category[txn.category] = by_category.get(txn.category, 0) + txn.amount
        day = as_date(txn.date)
        by_date[day] = by_date.get(day, 0) + txn.amount

    return _Buckets(
        by_weekday={day: tuple(amounts) for day, amounts in by_weekday.items()},
        by_category=by_category,
        by_date=by_date,
    )


def calculate_risk_score(inputs: RiskInputs) -> int:
    """
    Additive 0-100 overspend risk heuristic (higher = riskier).

    Starting from 50:
    - Days to payday:   +20 if <= 3, +10 if <= 7, -10 if > 14
    - Safe spend today: +25 if < 1000, +10 if < 5000, -15 if > 20000
    - Today is a historical high-risk day: +15
    - Month-to-date spend above 80% of a positive balance: +20
    - Streak under safe spend: -15 if >= 7 days, -5 if >= 3 days

    Result is clamped to [0, 100].
    """
    score = BASE_RISK_SCORE

    if inputs.days_to_payday <= 3:
        score += 20
    elif inputs.days_to_payday <= 7:
        score += 10
    elif inputs.days_to_payday > 14:
        score -= 10

    if inputs.safe_spend_today < 1000:
        score += 25
    elif inputs.safe_spend_today < 5000:
        score += 10
    elif inputs.safe_spend_today > 20000:
        score -= 15

    if weekday_name(inputs.today) in inputs.high_risk_days:
        score += 15

    if inputs.current_balance > 0 and inputs.spent_this_month > inputs.current_balance * 0.8:
        score += 20

    if inputs.current_streak >= 7:
        score -= 15
    elif inputs.current_streak >= 3:
        score -= 5

    return max(0, min(100, score))


def analyze_patterns(
    transactions: Sequence[Transaction],
    today: datetime,
    state: Optional[FinancialState] = None,
    previous: SpendingPattern = DEFAULT_PATTERN,
) -> SpendingPattern:
    """
    Derive a spending pattern from transaction history.

    With fewer than 7 transactions there is not enough signal: `previous` is
    returned unchanged. The streak always carries over from `previous`, since
    it is advanced once per closed day by `close_day`, not by analysis.

    `state` supplies the financial risk factors (days to payday, safe spend,
    balance, month-to-date spend). Without it the previous risk score is kept.
    """
    if len(transactions) < MIN_TRANSACTIONS:
        return previous

    buckets = _bucket_transactions(transactions)

    avg_by_day = {day: _mean(amounts) for day, amounts in buckets.by_weekday.items()}
    overall_day_avg = sum(avg_by_day.values()) / len(DAYS_OF_WEEK)
    high_risk_days = tuple(
        day for day in DAYS_OF_WEEK if avg_by_day[day] > overall_day_avg * HIGH_RISK_DAY_MULTIPLIER
    )

    weekend_amounts = [a for day in WEEKEND_DAYS for a in buckets.by_weekday[day]]
    weekday_amounts = [a for day in DAYS_OF_WEEK if day not in WEEKEND_DAYS for a in buckets.by_weekday[day]]
    avg_weekend_spend = _mean(weekend_amounts)
    avg_weekday_spend = _mean(weekday_amounts)

    overspend_triggers: List[str] = []
    weekend_heavy = avg_weekend_spend > avg_weekday_spend * WEEKEND_TRIGGER_MULTIPLIER
    if weekend_heavy:
        overspend_triggers.append("weekend_spending")
    if "Friday" in high_risk_days:
        overspend_triggers.append("friday_evening")

    # Trend needs month-over-month history, which isn't modeled yet
    ranked = sorted(buckets.by_category.items(), key=lambda item: item[1], reverse=True)
    top_categories = tuple(
        CategoryTrend(category=category, avg_monthly=total, trend="stable")
        for category, total in ranked[:TOP_CATEGORY_LIMIT]
    )

    risk_score = previous.risk_score
    if state is not None:
        risk_score = calculate_risk_score(
            RiskInputs(
                days_to_payday=state.days_to_payday,
                safe_spend_today=state.safe_spend_today,
                current_balance=state.current_balance,
                spent_this_month=state.spent_this_month,
                today=as_date(today),
                high_risk_days=high_risk_days,
                current_streak=previous.current_streak,
            )
        )

    return SpendingPattern(
        avg_daily_spend=_mean(list(buckets.by_date.values())),
        avg_weekend_spend=avg_weekend_spend,
        avg_weekday_spend=avg_weekday_spend,
        high_risk_days=high_risk_days,
        high_risk_times=("evening",) if weekend_heavy else (),
        top_categories=top_categories,
        overspend_triggers=tuple(overspend_triggers),
        current_streak=previous.current_streak,
        risk_score=risk_score,
        last_analyzed_at=today,
    )


def update_streak(pattern: SpendingPattern, under_safe_spend: bool) -> SpendingPattern:
    """Extend the streak by one day or reset it to zero"""
    return replace(pattern, current_streak=pattern.current_streak + 1 if under_safe_spend else 0)


def close_day(pattern: SpendingPattern, spent: float, safe_spend: float) -> SpendingPattern:
    """Record a finished day: spending at or below that day's safe spend keeps the streak alive"""
    return update_streak(pattern, spent <= safe_spend)


def high_risk_alert(
    pattern: SpendingPattern,
    state: FinancialState,
    now: datetime,
    policy: AlertPolicy = AlertPolicy(),
) -> Optional[str]:
    """
    Quick risk flag for the conversational layer.

    Returns the reason ("weekend_warning", "danger_zone" or "high_risk_day")
    or None when nothing stands out right now.
    """
    today = weekday_name(now)

    if today == "Friday" and now.hour >= policy.weekend_warning_hours[0] and "weekend_spending" in pattern.overspend_triggers:
        return "weekend_warning"

    if state.days_to_payday <= 5 and state.safe_spend_today < policy.danger_zone_safe_spend_threshold:
        return "danger_zone"

    if today in pattern.high_risk_days and pattern.risk_score > 70:
        return "high_risk_day"

    return None
