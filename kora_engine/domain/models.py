"""Domain models - pure Python dataclasses representing financial records"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from kora_engine.domain.exceptions import InvalidArgumentError

DEFAULT_CATEGORY = "Uncategorized"


@dataclass(frozen=True)
class FixedExpense:
    """Recurring monthly obligation (rent, subscriptions, loan repayments)"""

    name: str
    amount: float
    due_day: Optional[int] = None  # 1-31, None when no due date is tracked

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidArgumentError("Fixed expense name must not be empty")
        if self.amount <= 0:
            raise InvalidArgumentError(f"Fixed expense amount must be positive, got {self.amount}")
        if self.due_day is not None and (
            isinstance(self.due_day, bool) or not isinstance(self.due_day, int) or not 1 <= self.due_day <= 31
        ):
            raise InvalidArgumentError(f"Fixed expense due_day must be 1-31, got {self.due_day!r}")


@dataclass(frozen=True)
class Transaction:
    """Single spend event (debits only)"""

    id: str
    amount: float
    date: datetime
    category: str = DEFAULT_CATEGORY
    description: str = ""

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise InvalidArgumentError(f"Transaction amount must be positive, got {self.amount}")
        if not self.category or not self.category.strip():
            object.__setattr__(self, "category", DEFAULT_CATEGORY)


@dataclass(frozen=True)
class UserFinancialProfile:
    """Aggregate the engine reads: income, payday, balance and fixed expenses"""

    income: Optional[float] = None
    payday: Optional[int] = None  # day of month income arrives
    current_balance: float = 0.0
    savings_goal: Optional[float] = None
    fixed_expenses: Tuple[FixedExpense, ...] = ()


@dataclass(frozen=True)
class FinancialContext:
    """Everything needed to derive a financial state, passed as one value"""

    profile: UserFinancialProfile
    transactions: Tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class FinancialState:
    """Derived figures for a single 'today'"""

    current_balance: float
    payday: int
    total_fixed_expenses: float
    flexible_income: float
    days_to_payday: int
    upcoming_bills: float
    safe_spend_today: float
    spent_today: float
    spent_this_month: float
    flexible_remaining: float


@dataclass(frozen=True)
class CategoryTrend:
    """Top-category entry of a spending pattern"""

    category: str
    avg_monthly: float
    trend: str = "stable"  # "up" | "down" | "stable"


@dataclass(frozen=True)
class SpendingPattern:
    """Behavioral signals derived from transaction history"""

    avg_daily_spend: float = 0.0
    avg_weekend_spend: float = 0.0
    avg_weekday_spend: float = 0.0
    high_risk_days: Tuple[str, ...] = ()
    high_risk_times: Tuple[str, ...] = ()
    top_categories: Tuple[CategoryTrend, ...] = ()
    overspend_triggers: Tuple[str, ...] = ()
    current_streak: int = 0  # consecutive days under safe spend
    risk_score: int = 50  # 0-100, higher is riskier
    last_analyzed_at: Optional[datetime] = None


DEFAULT_PATTERN = SpendingPattern()


@dataclass(frozen=True)
class RiskInputs:
    """Financial and behavioral factors feeding the risk score"""

    days_to_payday: int
    safe_spend_today: float
    current_balance: float
    spent_this_month: float
    today: date
    high_risk_days: Tuple[str, ...] = ()
    current_streak: int = 0


@dataclass(frozen=True)
class AlertPolicy:
    """Thresholds for the proactive alert decision table"""

    danger_zone_max_days: int = 7
    danger_zone_safe_spend_threshold: float = 5000
    weekend_warning_hours: Tuple[int, int] = (17, 20)  # [start, end)
    payday_checkin_hours: Tuple[int, int] = (8, 12)
    weekend_max_days: int = 3


@dataclass(frozen=True)
class AlertMessage:
    """Payload handed to the notification dispatcher"""

    type: str
    title: str
    body: str = ""
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CategoryBreakdown:
    """Share of monthly spend for one category"""

    category: str
    amount: float
    percentage: float
    trend: str = "stable"


@dataclass(frozen=True)
class Observation:
    """Structured insight; phrasing is left to the conversational layer"""

    code: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MonthlyInsight:
    """Month-to-date spending summary"""

    month: str  # YYYY-MM
    total_spent: float
    avg_daily_spend: float
    top_category: Optional[str]
    category_breakdown: Tuple[CategoryBreakdown, ...]
    observations: Tuple[Observation, ...]
    risk_score: int
    savings_rate: float
    generated_at: datetime
