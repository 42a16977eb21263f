"""POST /v1/alerts - proactive alert selection and limit follow-ups"""

import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Request

from kora_engine.api.v1.schemas import AlertRequest, AlertResponse, AlertSchema, LimitFollowupRequest
from kora_engine.api.dependencies import get_alert_policy, get_now, get_request_id
from kora_engine.domain.alerts import limit_followup_alert, select_proactive_alert
from kora_engine.domain.finance import calculate_financial_state
from kora_engine.domain.models import DEFAULT_PATTERN, AlertPolicy
from kora_engine.domain.exceptions import InvalidArgumentError
from kora_engine.infrastructure.observability.metrics import (
    invalid_argument_counter,
    record_alert,
    record_calculation,
)
from kora_engine.infrastructure.observability.logging import log_alert

router = APIRouter()


@router.post("/alerts", response_model=AlertResponse)
def evaluate_alerts(
    request_body: AlertRequest,
    request: Request,
    now: datetime = Depends(get_now),
    policy: AlertPolicy = Depends(get_alert_policy),
):
    """
    Pick the single alert to surface right now, if any.

    Priority: danger_zone > weekend_warning > payday_checkin. Delivery and
    de-duplication of repeated firings stay with the caller.
    """
    request_id = get_request_id(request)
    moment = request_body.now or now
    pattern = request_body.pattern.to_domain() if request_body.pattern else DEFAULT_PATTERN
    profile = request_body.profile

    try:
        state = calculate_financial_state(request_body.to_context(), moment)
    except InvalidArgumentError as e:
        invalid_argument_counter.labels(operation="alerts").inc()
        logging.warning(f"Invalid financial profile: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    alert = select_proactive_alert(pattern, state, profile.income, moment, policy)

    record_calculation("alerts")
    record_alert(alert.type if alert else None)
    log_alert(request_id, alert.type if alert else None)

    return AlertResponse(alert=AlertSchema.from_domain(alert) if alert else None)


@router.post("/alerts/limit-followup", response_model=AlertSchema)
def limit_followup(request_body: LimitFollowupRequest, request: Request):
    """Follow-up on a limit the user set earlier (caller-triggered, never autonomous)"""
    alert = limit_followup_alert(request_body.limit_amount, request_body.actual_spent)

    record_alert(alert.type)
    log_alert(get_request_id(request), alert.type)

    return AlertSchema.from_domain(alert)
