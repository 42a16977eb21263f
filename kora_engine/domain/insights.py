"""Monthly insight generation - category breakdown, savings rate and observations"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from kora_engine.domain.finance import spent_in_month
from kora_engine.domain.models import (
    CategoryBreakdown,
    MonthlyInsight,
    Observation,
    SpendingPattern,
    Transaction,
)
from kora_engine.utils.date_utils import as_date, month_key

MAX_OBSERVATIONS = 4
DOMINANT_CATEGORY_PERCENT = 40
ELEVATED_RISK_SCORE = 70


def _category_breakdown(transactions: Sequence[Transaction], total_spent: float) -> List[CategoryBreakdown]:
    by_category: Dict[str, float] = {}
    for txn in transactions:
        by_category[txn.category] = by_category.get(txn.category, 0) + txn.amount

    ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryBreakdown(
            category=category,
            amount=amount,
            percentage=amount * 100 / total_spent if total_spent > 0 else 0.0,
        )
        for category, amount in ranked
    ]


def _observations(
    breakdown: Sequence[CategoryBreakdown],
    pattern: SpendingPattern,
    income: float,
    savings_rate: float,
    avg_daily_spend: float,
) -> List[Observation]:
    """Ordered by relevance; callers get the first MAX_OBSERVATIONS"""
    observations: List[Observation] = []

    if breakdown:
        top = breakdown[0]
        if top.percentage > DOMINANT_CATEGORY_PERCENT:
            observations.append(
                Observation("top_category_dominant", {"category": top.category, "percentage": top.percentage})
            )
        elif len(breakdown) >= 3:
            observations.append(
                Observation(
                    "spending_spread",
                    {"categoryCount": len(breakdown), "category": top.category, "percentage": top.percentage},
                )
            )

    if "weekend_spending" in pattern.overspend_triggers and pattern.avg_weekday_spend > 0:
        uplift = (pattern.avg_weekend_spend / pattern.avg_weekday_spend) * 100 - 100
        observations.append(Observation("weekend_hotspot", {"weekendUpliftPercent": uplift}))

    if income > 0:
        if savings_rate >= 20:
            observations.append(
                Observation("savings_strong", {"savingsRate": savings_rate, "projectedSavings": income * savings_rate / 100})
            )
        elif savings_rate >= 10:
            observations.append(Observation("savings_moderate", {"savingsRate": savings_rate}))
        else:
            observations.append(Observation("savings_tight", {"savingsRate": savings_rate}))

        if avg_daily_spend * 30 > income:
            observations.append(Observation("projected_overspend", {"avgDailySpend": avg_daily_spend}))

    if pattern.high_risk_days:
        observations.append(Observation("high_risk_days", {"days": list(pattern.high_risk_days[:2])}))

    if pattern.current_streak >= 3:
        code = "streak_strong" if pattern.current_streak >= 7 else "streak_building"
        observations.append(Observation(code, {"streak": pattern.current_streak}))

    if pattern.risk_score > ELEVATED_RISK_SCORE:
        observations.append(Observation("risk_elevated", {"riskScore": pattern.risk_score}))

    return observations


def generate_monthly_insight(
    transactions: Sequence[Transaction],
    pattern: SpendingPattern,
    income: Optional[float],
    now: datetime,
) -> MonthlyInsight:
    """
    Summarize month-to-date spending for the month containing `now`.

    Savings rate = max(0, (income - spent) / income * 100), 0 without income.
    Average daily spend divides by the day of month (days elapsed so far).
    """
    today = as_date(now)
    month_start = today.replace(day=1)
    month_transactions = [t for t in transactions if month_start <= as_date(t.date) <= today]

    total_spent = spent_in_month(month_transactions, today)
    avg_daily_spend = total_spent / max(1, today.day)
    breakdown = _category_breakdown(month_transactions, total_spent)

    monthly_income = income or 0
    savings_rate = max(0.0, (monthly_income - total_spent) * 100 / monthly_income) if monthly_income > 0 else 0.0

    observations = _observations(breakdown, pattern, monthly_income, savings_rate, avg_daily_spend)

    return MonthlyInsight(
        month=month_key(today),
        total_spent=total_spent,
        avg_daily_spend=avg_daily_spend,
        top_category=breakdown[0].category if breakdown else None,
        category_breakdown=tuple(breakdown),
        observations=tuple(observations[:MAX_OBSERVATIONS]),
        risk_score=pattern.risk_score,
        savings_rate=savings_rate,
        generated_at=now,
    )
