"""POST /v1/financial-state - Safe Spend Today and related figures"""

import time
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Request

from kora_engine.api.v1.schemas import FinancialStateRequest, FinancialStateResponse
from kora_engine.api.dependencies import get_now, get_request_id
from kora_engine.domain.finance import calculate_financial_state
from kora_engine.domain.exceptions import InvalidArgumentError
from kora_engine.infrastructure.observability.metrics import invalid_argument_counter, record_calculation
from kora_engine.infrastructure.observability.logging import log_financial_state

router = APIRouter()


@router.post("/financial-state", response_model=FinancialStateResponse)
def get_financial_state(
    request_body: FinancialStateRequest,
    request: Request,
    now: datetime = Depends(get_now),
):
    """
    Derive the user's financial state for one day.

    Flow:
    1. Build a FinancialContext from the submitted profile and transactions
    2. Resolve 'today' (request override or server clock), once
    3. Calculate days to payday, upcoming bills, safe spend and flexible remaining
    """
    start_time = time.time()
    request_id = get_request_id(request)
    today = request_body.today or now.date()

    try:
        state = calculate_financial_state(request_body.to_context(), today)
    except InvalidArgumentError as e:
        invalid_argument_counter.labels(operation="financial_state").inc()
        logging.warning(f"Invalid financial profile: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_calculation("financial_state")
    log_financial_state(request_id, state.days_to_payday, state.safe_spend_today, state.upcoming_bills, duration_ms)

    return FinancialStateResponse.from_domain(state)
