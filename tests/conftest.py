"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from kora_engine.api.main import create_app
from kora_engine.api.dependencies import get_now
from kora_engine.domain.models import FinancialState, Transaction


# Thursday, 12 June 2025, 10:00 local time
FIXED_NOW = datetime(2025, 6, 12, 10, 0)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a frozen clock"""
    app = create_app()
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    return TestClient(app)


@pytest.fixture
def weekend_heavy_transactions() -> list[Transaction]:
    """
    One week (Sun 1 June - Sat 7 June 2025) where Fri/Sat/Sun spend dwarfs weekdays.

    Weekday averages: Sun 3000, Mon-Thu 1000, Fri 5000, Sat 4000
    """
    spends = [
        (1, 3000, "Food"),  # Sunday
        (2, 1000, "Food"),
        (3, 1000, "Food"),
        (4, 1000, "Food"),
        (5, 1000, "Food"),
        (6, 5000, "Entertainment"),  # Friday
        (7, 4000, "Shopping"),  # Saturday
    ]
    return [
        Transaction(
            id=f"txn_{day}",
            amount=amount,
            date=datetime(2025, 6, day, 19, 30),
            category=category,
            description="Card payment",
        )
        for day, amount, category in spends
    ]


@pytest.fixture
def make_state():
    """Factory for a FinancialState with comfortable defaults, overridable per test"""

    def _make(**overrides) -> FinancialState:
        values = dict(
            current_balance=20000,
            payday=25,
            total_fixed_expenses=150000,
            flexible_income=150000,
            days_to_payday=10,
            upcoming_bills=0,
            safe_spend_today=8000,
            spent_today=0,
            spent_this_month=0,
            flexible_remaining=150000,
        )
        values.update(overrides)
        return FinancialState(**values)

    return _make
