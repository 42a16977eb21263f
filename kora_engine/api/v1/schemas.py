"""Pydantic schemas for API request/response validation"""

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from kora_engine.domain.models import (
    DEFAULT_CATEGORY,
    AlertMessage,
    CategoryTrend,
    FinancialContext,
    FinancialState,
    FixedExpense,
    MonthlyInsight,
    SpendingPattern,
    Transaction,
    UserFinancialProfile,
)


class FixedExpenseSchema(BaseModel):
    """Recurring monthly obligation"""

    name: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(..., gt=0)
    due_day: Optional[int] = Field(None, ge=1, le=31, description="Day of month the bill is due")

    def to_domain(self) -> FixedExpense:
        return FixedExpense(name=self.name, amount=self.amount, due_day=self.due_day)


class TransactionSchema(BaseModel):
    """Single spend event"""

    id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category: str = Field(DEFAULT_CATEGORY, max_length=50)
    description: str = Field("", max_length=500)
    date: datetime

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            amount=self.amount,
            date=self.date,
            category=self.category,
            description=self.description,
        )


class ProfileSchema(BaseModel):
    """User financial profile as stored by the persistence layer"""

    income: Optional[float] = Field(None, ge=0, description="Monthly income before fixed expenses")
    payday: Optional[int] = Field(None, ge=1, le=31, description="Day of month income arrives")
    current_balance: float = 0.0
    savings_goal: Optional[float] = Field(None, ge=0)
    fixed_expenses: List[FixedExpenseSchema] = Field(default_factory=list)

    def to_domain(self) -> UserFinancialProfile:
        return UserFinancialProfile(
            income=self.income,
            payday=self.payday,
            current_balance=self.current_balance,
            savings_goal=self.savings_goal,
            fixed_expenses=tuple(e.to_domain() for e in self.fixed_expenses),
        )


class ProfileRequest(BaseModel):
    """Base body for every request that needs the profile and history"""

    profile: ProfileSchema
    transactions: List[TransactionSchema] = Field(default_factory=list)

    def to_context(self) -> FinancialContext:
        return FinancialContext(
            profile=self.profile.to_domain(),
            transactions=tuple(t.to_domain() for t in self.transactions),
        )


class FinancialStateRequest(ProfileRequest):
    """Request body for POST /v1/financial-state"""

    today: Optional[date] = Field(None, description="Defaults to the server's current date")


class FinancialStateResponse(BaseModel):
    """Response for POST /v1/financial-state"""

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

    @classmethod
    def from_domain(cls, state: FinancialState) -> "FinancialStateResponse":
        return cls(**asdict(state))


class CategoryTrendSchema(BaseModel):
    category: str
    avg_monthly: float
    trend: str = "stable"


class SpendingPatternSchema(BaseModel):
    """Spending pattern, both as response and as caller-held previous pattern"""

    avg_daily_spend: float = 0.0
    avg_weekend_spend: float = 0.0
    avg_weekday_spend: float = 0.0
    high_risk_days: List[str] = Field(default_factory=list)
    high_risk_times: List[str] = Field(default_factory=list)
    top_categories: List[CategoryTrendSchema] = Field(default_factory=list)
    overspend_triggers: List[str] = Field(default_factory=list)
    current_streak: int = Field(0, ge=0)
    risk_score: int = Field(50, ge=0, le=100)
    last_analyzed_at: Optional[datetime] = None

    def to_domain(self) -> SpendingPattern:
        return SpendingPattern(
            avg_daily_spend=self.avg_daily_spend,
            avg_weekend_spend=self.avg_weekend_spend,
            avg_weekday_spend=self.avg_weekday_spend,
            high_risk_days=tuple(self.high_risk_days),
            high_risk_times=tuple(self.high_risk_times),
            top_categories=tuple(
                CategoryTrend(category=c.category, avg_monthly=c.avg_monthly, trend=c.trend)
                for c in self.top_categories
            ),
            overspend_triggers=tuple(self.overspend_triggers),
            current_streak=self.current_streak,
            risk_score=self.risk_score,
            last_analyzed_at=self.last_analyzed_at,
        )

    @classmethod
    def from_domain(cls, pattern: SpendingPattern) -> "SpendingPatternSchema":
        return cls(**asdict(pattern))


class PatternRequest(ProfileRequest):
    """Request body for POST /v1/patterns"""

    previous_pattern: Optional[SpendingPatternSchema] = None
    now: Optional[datetime] = Field(None, description="Defaults to the server's current time")


class StreakRequest(BaseModel):
    """Request body for POST /v1/patterns/streak (called once per closed day)"""

    pattern: SpendingPatternSchema
    spent: float = Field(..., ge=0, description="Total spent on the closed day")
    safe_spend: float = Field(..., description="Safe spend figure for the closed day")


class AlertRequest(ProfileRequest):
    """Request body for POST /v1/alerts"""

    pattern: Optional[SpendingPatternSchema] = None
    now: Optional[datetime] = Field(None, description="Caller's local time; defaults to the server's")


class AlertSchema(BaseModel):
    """Alert payload for the notification dispatcher"""

    type: str
    title: str
    body: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, alert: AlertMessage) -> "AlertSchema":
        return cls(type=alert.type, title=alert.title, body=alert.body, data=dict(alert.data))


class AlertResponse(BaseModel):
    """Response for POST /v1/alerts"""

    alert: Optional[AlertSchema] = None


class LimitFollowupRequest(BaseModel):
    """Request body for POST /v1/alerts/limit-followup"""

    limit_amount: float = Field(..., ge=0)
    actual_spent: float = Field(..., ge=0)


class InsightRequest(ProfileRequest):
    """Request body for POST /v1/insights"""

    pattern: Optional[SpendingPatternSchema] = None
    now: Optional[datetime] = None


class CategoryBreakdownSchema(BaseModel):
    category: str
    amount: float
    percentage: float
    trend: str = "stable"


class ObservationSchema(BaseModel):
    code: str
    data: Dict[str, Any] = Field(default_factory=dict)


class InsightResponse(BaseModel):
    """Response for POST /v1/insights"""

    month: str
    total_spent: float
    avg_daily_spend: float
    top_category: Optional[str] = None
    category_breakdown: List[CategoryBreakdownSchema]
    observations: List[ObservationSchema]
    risk_score: int
    savings_rate: float
    generated_at: datetime

    @classmethod
    def from_domain(cls, insight: MonthlyInsight) -> "InsightResponse":
        return cls(**asdict(insight))
