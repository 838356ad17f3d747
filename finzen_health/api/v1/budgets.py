"""Budget assessment endpoints"""

import time
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from finzen_health.api.v1.schemas import (
    BudgetAssessmentRequest,
    BudgetAssessmentResponse,
    BudgetAssessmentSchema,
    BudgetSummarySchema,
)
from finzen_health.api.dependencies import get_budget_projector, get_reporting_client, get_request_id
from finzen_health.domain.budgets import BudgetProjector, summarize_assessments
from finzen_health.domain.models import BudgetSnapshot
from finzen_health.domain.exceptions import InvalidBudgetError, ReportingAPIError
from finzen_health.infrastructure.clients.reporting import ReportingClient
from finzen_health.infrastructure.observability.metrics import (
    invalid_input_counter,
    record_budgets,
    reporting_fetch_failures_counter,
)
from finzen_health.infrastructure.observability.logging import log_budget_assessment

router = APIRouter()


def _assess(
    budgets: List[BudgetSnapshot],
    projector: BudgetProjector,
    request_id: str,
    start_time: float,
    user_id: Optional[str] = None,
    from_reporting: bool = False,
) -> BudgetAssessmentResponse:
    try:
        assessments = projector.assess_all(budgets)
    except InvalidBudgetError as e:
        invalid_input_counter.labels(kind="budget").inc()
        logging.warning(f"Invalid budget: {e}", extra={"request_id": request_id, "budget_id": e.budget_id})
        if from_reporting:
            raise HTTPException(status_code=502, detail=f"Reporting service returned an invalid budget: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    summary = summarize_assessments(assessments, projector.policy)

    duration_ms = (time.time() - start_time) * 1000
    record_budgets(assessments)
    log_budget_assessment(request_id, len(assessments), summary, duration_ms, user_id=user_id)

    return BudgetAssessmentResponse(
        assessments=[BudgetAssessmentSchema.from_domain(a) for a in assessments],
        summary=BudgetSummarySchema.from_domain(summary),
    )


@router.post("/budgets/assessment", response_model=BudgetAssessmentResponse)
def assess_budgets(
    request_body: BudgetAssessmentRequest,
    request: Request,
    projector: BudgetProjector = Depends(get_budget_projector),
):
    """
    Assess caller-supplied budget snapshots.

    The whole batch is rejected if any budget is invalid.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    budgets = [b.to_domain() for b in request_body.budgets]
    return _assess(budgets, projector, request_id, start_time)


@router.get("/budgets/current", response_model=BudgetAssessmentResponse)
async def get_current_budgets(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    projector: BudgetProjector = Depends(get_budget_projector),
    reporting_client: ReportingClient = Depends(get_reporting_client),
):
    """Fetch budgets active today and assess them."""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        budgets = await reporting_client.get_active_budgets(user_id)
    except ReportingAPIError as e:
        reporting_fetch_failures_counter.inc()
        logging.error(f"Reporting API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Reporting service unavailable")

    return _assess(budgets, projector, request_id, start_time, user_id=user_id, from_reporting=True)
