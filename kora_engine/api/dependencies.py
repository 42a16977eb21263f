"""Dependency injection for FastAPI endpoints"""

from datetime import datetime
from fastapi import Request
from kora_engine.config import settings
from kora_engine.domain.models import AlertPolicy


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_now() -> datetime:
    """Wall clock, read only at the edge; the domain always receives it as an argument"""
    return datetime.now()


def get_alert_policy() -> AlertPolicy:
    """Alert thresholds from settings"""
    return AlertPolicy(
        danger_zone_max_days=settings.danger_zone_max_days,
        danger_zone_safe_spend_threshold=settings.danger_zone_safe_spend_threshold,
        weekend_warning_hours=(settings.weekend_warning_start_hour, settings.weekend_warning_end_hour),
        payday_checkin_hours=(settings.payday_checkin_start_hour, settings.payday_checkin_end_hour),
        weekend_max_days=settings.weekend_max_days,
    )
