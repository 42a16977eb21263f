"""POST /v1/patterns - spending pattern analysis and daily streak updates"""

import time
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Request

from kora_engine.api.v1.schemas import PatternRequest, SpendingPatternSchema, StreakRequest
from kora_engine.api.dependencies import get_now, get_request_id
from kora_engine.domain.finance import calculate_financial_state
from kora_engine.domain.models import DEFAULT_PATTERN
from kora_engine.domain.patterns import MIN_TRANSACTIONS, analyze_patterns, close_day
from kora_engine.domain.exceptions import InvalidArgumentError
from kora_engine.infrastructure.observability.metrics import (
    invalid_argument_counter,
    record_calculation,
    record_risk_score,
)
from kora_engine.infrastructure.observability.logging import log_pattern_analysis

router = APIRouter()


@router.post("/patterns", response_model=SpendingPatternSchema)
def analyze_spending_patterns(
    request_body: PatternRequest,
    request: Request,
    now: datetime = Depends(get_now),
):
    """
    Analyze transaction history into a spending pattern.

    With fewer than 7 transactions the previous pattern (or the default one)
    comes back unchanged. The financial state feeding the risk score is
    computed from the same 'now' as the analysis; without a configured payday
    the previous risk score is kept.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    moment = request_body.now or now
    previous = request_body.previous_pattern.to_domain() if request_body.previous_pattern else DEFAULT_PATTERN

    try:
        context = request_body.to_context()
        state = calculate_financial_state(context, moment) if context.profile.payday is not None else None
    except InvalidArgumentError as e:
        invalid_argument_counter.labels(operation="patterns").inc()
        logging.warning(f"Invalid financial profile: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    pattern = analyze_patterns(context.transactions, moment, state=state, previous=previous)

    analyzed = len(context.transactions) >= MIN_TRANSACTIONS
    duration_ms = (time.time() - start_time) * 1000
    record_calculation("patterns")
    if analyzed:
        record_risk_score(pattern.risk_score)
    log_pattern_analysis(request_id, len(context.transactions), analyzed, pattern.risk_score, duration_ms)

    return SpendingPatternSchema.from_domain(pattern)


@router.post("/patterns/streak", response_model=SpendingPatternSchema)
def close_spending_day(request_body: StreakRequest):
    """Advance or reset the streak for one finished day"""
    pattern = close_day(request_body.pattern.to_domain(), request_body.spent, request_body.safe_spend)
    record_calculation("streak")
    return SpendingPatternSchema.from_domain(pattern)
