"""Financial vibe endpoints"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from finzen_health.api.v1.schemas import PeriodMetricsRequest, VibeResponse
from finzen_health.api.dependencies import get_reporting_client, get_request_id, get_vibe_scorer
from finzen_health.domain.models import PeriodMetrics
from finzen_health.domain.vibe import VibeScorer
from finzen_health.domain.exceptions import InvalidMetricsError, ReportingAPIError
from finzen_health.infrastructure.clients.reporting import ReportingClient
from finzen_health.infrastructure.observability.metrics import (
    invalid_input_counter,
    record_vibe,
    reporting_fetch_failures_counter,
)
from finzen_health.infrastructure.observability.logging import log_vibe_assessment
from finzen_health.utils.date_utils import month_bounds

router = APIRouter()


def _assess(
    metrics: PeriodMetrics,
    scorer: VibeScorer,
    request_id: str,
    start_time: float,
    user_id: Optional[str] = None,
    from_reporting: bool = False,
) -> VibeResponse:
    try:
        assessment = scorer.assess(metrics)
    except InvalidMetricsError as e:
        invalid_input_counter.labels(kind="metrics").inc()
        logging.warning(f"Invalid metrics: {e}", extra={"request_id": request_id})
        if from_reporting:
            raise HTTPException(status_code=502, detail=f"Reporting service returned invalid metrics: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_vibe(assessment)
    log_vibe_assessment(request_id, assessment, duration_ms, user_id=user_id)

    return VibeResponse.from_domain(assessment)


@router.post("/vibe", response_model=VibeResponse)
def assess_vibe(
    request_body: PeriodMetricsRequest,
    request: Request,
    scorer: VibeScorer = Depends(get_vibe_scorer),
):
    """Score caller-supplied period metrics."""
    start_time = time.time()
    request_id = get_request_id(request)
    return _assess(request_body.to_domain(), scorer, request_id, start_time)


@router.get("/vibe/current", response_model=VibeResponse)
async def get_current_vibe(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    start_date: Optional[date] = Query(None, description="Window start (default: first day of this month)"),
    end_date: Optional[date] = Query(None, description="Window end (default: last day of this month)"),
    scorer: VibeScorer = Depends(get_vibe_scorer),
    reporting_client: ReportingClient = Depends(get_reporting_client),
):
    """
    Fetch metrics for a window from the reporting service and score them.

    Flow:
    1. Resolve the window (current calendar month by default)
    2. Fetch aggregated metrics from the reporting API
    3. Classify, score and pick advice
    """
    start_time = time.time()
    request_id = get_request_id(request)

    month_start, month_end = month_bounds(date.today())
    start_date = start_date or month_start
    end_date = end_date or month_end
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")

    try:
        metrics = await reporting_client.get_period_metrics(user_id, start_date, end_date)
    except ReportingAPIError as e:
        reporting_fetch_failures_counter.inc()
        logging.error(f"Reporting API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Reporting service unavailable")

    return _assess(metrics, scorer, request_id, start_time, user_id=user_id, from_reporting=True)
