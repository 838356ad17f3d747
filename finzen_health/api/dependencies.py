"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache
from fastapi import Request
from finzen_health.config import settings
from finzen_health.domain.budgets import BudgetProjector
from finzen_health.domain.vibe import VibeScorer
from finzen_health.infrastructure.clients.reporting import ReportingClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_reporting_client() -> ReportingClient:
    """Provide Reporting API client instance"""
    return ReportingClient()


@lru_cache
def get_vibe_scorer() -> VibeScorer:
    """Shared scorer built from the configured policy"""
    return VibeScorer(settings.vibe_policy())


@lru_cache
def get_budget_projector() -> BudgetProjector:
    """Shared projector built from the configured policy"""
    return BudgetProjector(settings.budget_policy())
