"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def _transactions(count: int) -> list[dict]:
    """Weekend-heavy history starting Sunday 1 June 2025"""
    amounts = [3000, 1000, 1000, 1000, 1000, 5000, 4000]
    return [
        {
            "id": f"tx_{i}",
            "amount": amounts[i % 7],
            "category": "Food" if i % 7 < 5 else "Nightlife",
            "description": "Card payment",
            "date": f"2025-06-{i + 1:02d}T19:30:00",
        }
        for i in range(count)
    ]


@pytest.fixture
def profile() -> dict:
    return {
        "income": 300000,
        "payday": 21,
        "current_balance": 1630,
        "fixed_expenses": [
            {"name": "Rent", "amount": 150000},
            {"name": "Phone", "amount": 5000},
        ],
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "kora-engine"}


def test_metrics_endpoint(client: TestClient, profile: dict):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/financial-state", json={"profile": profile})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "kora_calculation_total" in response.text


def test_request_id_is_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "mobile-123"})
    assert response.headers["X-Request-ID"] == "mobile-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]
    assert float(generated.headers["X-Response-Time-Ms"]) >= 0


def test_financial_state_uses_server_clock(client: TestClient, profile: dict):
    """Clock frozen at 12 June: 9 days to payday 21, nothing reserved -> floor(1630 / 9)"""
    response = client.post("/v1/financial-state", json={"profile": profile})

    assert response.status_code == 200
    data = response.json()
    assert data["days_to_payday"] == 9
    assert data["upcoming_bills"] == 0
    assert data["safe_spend_today"] == 181
    assert data["total_fixed_expenses"] == 155000
    assert data["flexible_income"] == 145000


def test_financial_state_today_override(client: TestClient):
    body = {
        "profile": {
            "payday": 21,
            "current_balance": 200,
            "fixed_expenses": [{"name": "rent", "amount": 1400, "due_day": 1}],
        },
        "today": "2025-06-20",
    }
    response = client.post("/v1/financial-state", json=body)

    assert response.status_code == 200
    assert response.json()["days_to_payday"] == 1
    assert response.json()["safe_spend_today"] == 200


def test_financial_state_counts_month_spend(client: TestClient, profile: dict):
    body = {"profile": profile, "transactions": _transactions(3)}
    data = client.post("/v1/financial-state", json=body).json()

    assert data["spent_this_month"] == 5000
    assert data["flexible_remaining"] == 140000


def test_financial_state_without_payday_rejected(client: TestClient, profile: dict):
    profile["payday"] = None
    response = client.post("/v1/financial-state", json={"profile": profile})
    assert response.status_code == 422
    assert "Payday" in response.json()["detail"]


@pytest.mark.parametrize("payday", [0, 32])
def test_financial_state_payday_out_of_range(client: TestClient, profile: dict, payday: int):
    profile["payday"] = payday
    response = client.post("/v1/financial-state", json={"profile": profile})
    assert response.status_code == 422


def test_financial_state_rejects_bad_expense(client: TestClient, profile: dict):
    profile["fixed_expenses"] = [{"name": "Rent", "amount": -1, "due_day": 40}]
    response = client.post("/v1/financial-state", json={"profile": profile})
    assert response.status_code == 422


def test_patterns_insufficient_data_returns_default(client: TestClient, profile: dict):
    body = {"profile": profile, "transactions": _transactions(6)}
    response = client.post("/v1/patterns", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["risk_score"] == 50
    assert data["high_risk_days"] == []
    assert data["last_analyzed_at"] is None


def test_patterns_full_analysis(client: TestClient, profile: dict):
    body = {"profile": profile, "transactions": _transactions(7)}
    response = client.post("/v1/patterns", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["high_risk_days"] == ["Sunday", "Friday", "Saturday"]
    assert data["overspend_triggers"] == ["weekend_spending", "friday_evening"]
    assert data["top_categories"][0]["category"] == "Nightlife"
    assert 0 <= data["risk_score"] <= 100


def test_patterns_without_payday_keeps_previous_score(client: TestClient, profile: dict):
    profile["payday"] = None
    body = {
        "profile": profile,
        "transactions": _transactions(7),
        "previous_pattern": {"risk_score": 33, "current_streak": 5},
    }
    data = client.post("/v1/patterns", json=body).json()

    assert data["risk_score"] == 33
    assert data["current_streak"] == 5


@pytest.mark.parametrize("path", ["/v1/patterns", "/v1/insights"])
def test_blank_expense_name_rejected(client: TestClient, profile: dict, path: str):
    """Whitespace-only names pass schema length checks but fail domain validation"""
    profile["fixed_expenses"] = [{"name": "   ", "amount": 10}]
    response = client.post(path, json={"profile": profile, "transactions": _transactions(7)})

    assert response.status_code == 422
    assert "name" in response.json()["detail"]


def test_patterns_streak(client: TestClient):
    body = {"pattern": {"current_streak": 2}, "spent": 150, "safe_spend": 181}
    assert client.post("/v1/patterns/streak", json=body).json()["current_streak"] == 3

    body["spent"] = 500
    assert client.post("/v1/patterns/streak", json=body).json()["current_streak"] == 0


def test_alerts_danger_zone(client: TestClient):
    """12 June, payday 15: 3 days left, floor(10000 / 3) = 3333 < 5000"""
    body = {"profile": {"payday": 15, "current_balance": 10000}}
    response = client.post("/v1/alerts", json=body)

    assert response.status_code == 200
    alert = response.json()["alert"]
    assert alert["type"] == "danger_zone"
    assert alert["data"] == {"balance": 10000, "daysToPayday": 3, "safeSpendToday": 3333}


def test_alerts_weekend_warning_with_now_override(client: TestClient):
    body = {
        "profile": {"payday": 30, "current_balance": 500000},
        "pattern": {"overspend_triggers": ["weekend_spending"]},
        "now": "2025-06-13T18:15:00",
    }
    alert = client.post("/v1/alerts", json=body).json()["alert"]

    assert alert["type"] == "weekend_warning"
    assert alert["data"]["suggestedLimit"] == 500000 // 17 * 3


def test_alerts_none(client: TestClient):
    body = {"profile": {"payday": 30, "current_balance": 500000}}
    response = client.post("/v1/alerts", json=body)

    assert response.status_code == 200
    assert response.json() == {"alert": None}


def test_alerts_without_payday_rejected(client: TestClient):
    response = client.post("/v1/alerts", json={"profile": {"current_balance": 100}})
    assert response.status_code == 422


def test_limit_followup(client: TestClient):
    response = client.post("/v1/alerts/limit-followup", json={"limit_amount": 20000, "actual_spent": 23000})

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "limit_followup"
    assert data["data"]["overUnder"] == 3000
    assert data["data"]["wasUnder"] is False


def test_insights(client: TestClient, profile: dict):
    body = {"profile": profile, "transactions": _transactions(7)}
    response = client.post("/v1/insights", json=body)

    assert response.status_code == 200
    data = response.json()
    assert data["month"] == "2025-06"
    assert data["total_spent"] == 16000
    assert data["top_category"] == "Nightlife"
    assert len(data["observations"]) <= 4
