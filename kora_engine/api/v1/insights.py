"""POST /v1/insights - month-to-date spending insight"""

import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Request

from kora_engine.api.v1.schemas import InsightRequest, InsightResponse
from kora_engine.api.dependencies import get_now, get_request_id
from kora_engine.domain.insights import generate_monthly_insight
from kora_engine.domain.models import DEFAULT_PATTERN
from kora_engine.domain.exceptions import InvalidArgumentError
from kora_engine.infrastructure.observability.metrics import invalid_argument_counter, record_calculation

router = APIRouter()


@router.post("/insights", response_model=InsightResponse)
def get_monthly_insight(
    request_body: InsightRequest,
    request: Request,
    now: datetime = Depends(get_now),
):
    """
    Summarize the current month: category breakdown, savings rate and observations.

    Does not need a configured payday.
    """
    pattern = request_body.pattern.to_domain() if request_body.pattern else DEFAULT_PATTERN

    try:
        context = request_body.to_context()
    except InvalidArgumentError as e:
        invalid_argument_counter.labels(operation="insights").inc()
        logging.warning(f"Invalid financial profile: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    insight = generate_monthly_insight(
        context.transactions,
        pattern,
        context.profile.income,
        request_body.now or now,
    )

    record_calculation("insights")
    return InsightResponse.from_domain(insight)
