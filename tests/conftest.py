"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from finzen_health.api.main import create_app
from finzen_health.domain.models import BudgetSnapshot


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


def make_budget(
    id: str = "b1",
    name: str = "Comida",
    limit: float = 1000.0,
    spent: float = 0.0,
    period_total_days: int = 30,
    period_elapsed_days: int = 15,
) -> BudgetSnapshot:
    return BudgetSnapshot(
        id=id,
        name=name,
        limit=limit,
        spent=spent,
        period_total_days=period_total_days,
        period_elapsed_days=period_elapsed_days,
    )


@pytest.fixture
def budget_factory():
    """Build BudgetSnapshot objects with sensible defaults"""
    return make_budget


@pytest.fixture
def sample_budgets() -> list[BudgetSnapshot]:
    """A month of budgets on day 20 of 30, spanning every status"""
    return [
        make_budget(id="food", name="Comida", limit=1000, spent=950, period_elapsed_days=20),
        make_budget(id="transport", name="Transporte", limit=400, spent=120, period_elapsed_days=20),
        make_budget(id="fun", name="Entretenimiento", limit=300, spent=330, period_elapsed_days=20),
        make_budget(id="home", name="Hogar", limit=2000, spent=1300, period_elapsed_days=20),
    ]
