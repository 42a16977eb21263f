"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from kora_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_financial_state(
    request_id: str,
    days_to_payday: int,
    safe_spend_today: float,
    upcoming_bills: float,
    duration_ms: float,
) -> None:
    """Log the headline figures of a financial state calculation"""
    logging.info(
        "Financial state calculated",
        extra={
            "request_id": request_id,
            "step": "financial_state",
            "days_to_payday": days_to_payday,
            "safe_spend_today": safe_spend_today,
            "upcoming_bills": upcoming_bills,
            "duration_ms": duration_ms,
        },
    )


def log_pattern_analysis(
    request_id: str,
    transaction_count: int,
    analyzed: bool,
    risk_score: int,
    duration_ms: float,
) -> None:
    """Log pattern analysis outcome; analyzed=False means too little data"""
    logging.info(
        "Pattern analysis completed" if analyzed else "Pattern analysis skipped: insufficient data",
        extra={
            "request_id": request_id,
            "step": "pattern_analysis",
            "transaction_count": transaction_count,
            "risk_score": risk_score,
            "duration_ms": duration_ms,
        },
    )


def log_alert(request_id: str, alert_type: Optional[str]) -> None:
    """Log which proactive alert (if any) was surfaced"""
    logging.info(
        "Alert evaluated",
        extra={
            "request_id": request_id,
            "step": "alert",
            "alert_type": alert_type or "none",
        },
    )
