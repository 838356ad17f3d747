"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from finzen_health.domain.models import BudgetSummary, VibeAssessment


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args, service_name: str = "finzen-health", **kwargs):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "finzen-health") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_vibe_assessment(
    request_id: str,
    assessment: VibeAssessment,
    duration_ms: float,
    user_id: Optional[str] = None,
) -> None:
    """Log structured vibe outcome for analysis"""
    logging.info(
        "Vibe assessed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "vibe_complete",
            "attention_score": assessment.attention_score,
            "attention_band": assessment.attention_band.value,
            "runway_level": assessment.runway_level.value,
            "advice_code": assessment.advice_code.value,
            "duration_ms": duration_ms,
        },
    )


def log_budget_assessment(
    request_id: str,
    budget_count: int,
    summary: BudgetSummary,
    duration_ms: float,
    user_id: Optional[str] = None,
) -> None:
    """Log structured budget batch outcome"""
    logging.info(
        "Budgets assessed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "budgets_complete",
            "budget_count": budget_count,
            "control_status": summary.control_status.value,
            "projection_alerts": len(summary.projection_alerts),
            "duration_ms": duration_ms,
        },
    )
