"""Integration tests for API endpoints"""

from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from finzen_health.domain.models import BudgetSnapshot, PeriodMetrics
from finzen_health.domain.exceptions import ReportingAPIError


def budget_payload(**overrides) -> dict:
    payload = {
        "id": "food",
        "name": "Comida",
        "limit": 1000,
        "spent": 950,
        "period_total_days": 30,
        "period_elapsed_days": 20,
    }
    payload.update(overrides)
    return payload


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "finzen_vibe_assessment_total" in response.text
    assert "finzen_budget_status_total" in response.text


def test_request_id_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_request_id_generated(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_vibe_endpoint_stop_spending(client: TestClient):
    """Test POST /v1/vibe with the most severe combination"""
    response = client.post("/v1/vibe", json={"volatility": 4000, "burnRate": 900, "runwayDays": 5})

    assert response.status_code == 200
    data = response.json()
    assert data["volatility"] == {"level": "caos", "emoji": "🎢", "label": "Montaña Rusa"}
    assert data["burn_rate"]["level"] == "millionaire"
    assert data["runway"]["level"] == "danger"
    assert data["attention_score"] == 80
    assert data["attention_band"] == "critical"
    assert data["advice_code"] == "stop_spending"
    assert data["advice"] == "Frena ya!"


def test_vibe_endpoint_null_runway(client: TestClient):
    """Test null runway is accepted and treated as zero days"""
    response = client.post("/v1/vibe", json={"volatility": 100, "burn_rate": 100, "runway_days": None})

    assert response.status_code == 200
    data = response.json()
    assert data["runway"]["level"] == "danger"
    assert data["runway_value"] is None
    assert data["advice_code"] == "increase_income"


def test_vibe_endpoint_rejects_negative_volatility(client: TestClient):
    response = client.post("/v1/vibe", json={"volatility": -10, "burnRate": 100, "runwayDays": 10})

    assert response.status_code == 422
    assert "volatility" in response.json()["detail"]


def test_vibe_endpoint_missing_field(client: TestClient):
    response = client.post("/v1/vibe", json={"volatility": 10})
    assert response.status_code == 422


def test_budget_assessment_endpoint(client: TestClient):
    """Test POST /v1/budgets/assessment returns assessments and summary"""
    response = client.post(
        "/v1/budgets/assessment",
        json={
            "budgets": [
                budget_payload(),
                budget_payload(id="rent", name="Renta", limit=500, spent=500, period_elapsed_days=15),
                budget_payload(id="fun", name="Salidas", limit=400, spent=100),
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()

    food, rent, fun = data["assessments"]
    assert food["status"] == "warning"
    assert food["projected_overspend"] == 425.0
    assert rent["status"] == "danger"
    assert rent["progress_percent"] == 100
    assert fun["status"] == "normal"
    assert fun["projected_overspend"] is None

    summary = data["summary"]
    assert summary["total_limit"] == 1900
    assert summary["total_spent"] == 1550
    assert summary["remaining"] == 350
    # (95 + 100 + 25) / 3 = 73.3
    assert summary["control_status"] == "normal"
    assert summary["control_label"] == "Control normal"
    assert [a["budget_id"] for a in summary["projection_alerts"]] == ["food", "rent"]
    assert summary["best_budget"]["budget_id"] == "rent"


def test_budget_assessment_empty(client: TestClient):
    response = client.post("/v1/budgets/assessment", json={"budgets": []})

    assert response.status_code == 200
    data = response.json()
    assert data["assessments"] == []
    assert data["summary"]["control_status"] == "no_budgets"


def test_budget_assessment_rejects_zero_limit(client: TestClient):
    """Test one zero-limit budget fails the whole batch"""
    response = client.post(
        "/v1/budgets/assessment",
        json={"budgets": [budget_payload(), budget_payload(id="broken", limit=0)]},
    )

    assert response.status_code == 422
    assert "broken" in response.json()["detail"]


def test_budget_assessment_rejects_elapsed_past_total(client: TestClient):
    response = client.post(
        "/v1/budgets/assessment",
        json={"budgets": [budget_payload(period_elapsed_days=45)]},
    )
    assert response.status_code == 422


@patch("finzen_health.infrastructure.clients.reporting.ReportingClient.get_period_metrics", new_callable=AsyncMock)
def test_current_vibe_endpoint(mock_metrics: AsyncMock, client: TestClient):
    """Test GET /v1/vibe/current scores metrics from the reporting service"""
    mock_metrics.return_value = PeriodMetrics(volatility=100, burn_rate=100, runway_days=90)

    response = client.get(
        "/v1/vibe/current",
        params={"user_id": "user_calm", "start_date": "2025-03-01", "end_date": "2025-03-31"},
    )

    assert response.status_code == 200
    assert response.json()["advice_code"] == "keep_it_up"
    args = mock_metrics.await_args.args
    assert args[0] == "user_calm"
    assert str(args[1]) == "2025-03-01"
    assert str(args[2]) == "2025-03-31"


@patch("finzen_health.infrastructure.clients.reporting.ReportingClient.get_period_metrics", new_callable=AsyncMock)
def test_current_vibe_defaults_to_this_month(mock_metrics: AsyncMock, client: TestClient):
    mock_metrics.return_value = PeriodMetrics(volatility=0, burn_rate=0, runway_days=None)

    response = client.get("/v1/vibe/current", params={"user_id": "user_1"})

    assert response.status_code == 200
    _, start, end = mock_metrics.await_args.args
    assert start.day == 1
    assert start.month == end.month


@patch("finzen_health.infrastructure.clients.reporting.ReportingClient.get_period_metrics", new_callable=AsyncMock)
def test_current_vibe_reporting_unavailable(mock_metrics: AsyncMock, client: TestClient):
    mock_metrics.side_effect = ReportingAPIError("Reporting API timeout after 5.0s")

    response = client.get("/v1/vibe/current", params={"user_id": "user_1"})

    assert response.status_code == 503
    assert response.json()["detail"] == "Reporting service unavailable"


def test_current_vibe_rejects_inverted_window(client: TestClient):
    response = client.get(
        "/v1/vibe/current",
        params={"user_id": "user_1", "start_date": "2025-03-31", "end_date": "2025-03-01"},
    )
    assert response.status_code == 400


@patch("finzen_health.infrastructure.clients.reporting.ReportingClient.get_active_budgets", new_callable=AsyncMock)
def test_current_budgets_endpoint(mock_budgets: AsyncMock, client: TestClient):
    """Test GET /v1/budgets/current assesses budgets from the reporting service"""
    mock_budgets.return_value = [
        BudgetSnapshot(
            id="1", name="Comida", limit=1000, spent=950, period_total_days=30, period_elapsed_days=20
        ),
    ]

    response = client.get("/v1/budgets/current", params={"user_id": "user_1"})

    assert response.status_code == 200
    data = response.json()
    assert data["assessments"][0]["status"] == "warning"
    assert data["summary"]["projection_alerts"][0]["excess"] == 425.0


@patch("finzen_health.infrastructure.clients.reporting.ReportingClient.get_active_budgets", new_callable=AsyncMock)
def test_current_budgets_reporting_unavailable(mock_budgets: AsyncMock, client: TestClient):
    mock_budgets.side_effect = ReportingAPIError("Reporting API error: 500")

    response = client.get("/v1/budgets/current", params={"user_id": "user_1"})

    assert response.status_code == 503


@patch("finzen_health.infrastructure.clients.reporting.ReportingClient.get_active_budgets", new_callable=AsyncMock)
def test_current_budgets_invalid_upstream_budget_is_bad_gateway(mock_budgets: AsyncMock, client: TestClient):
    """A broken budget from the reporting service is an upstream fault, not a caller error"""
    mock_budgets.return_value = [
        BudgetSnapshot(
            id="broken", name="Comida", limit=0, spent=10, period_total_days=30, period_elapsed_days=5
        ),
    ]

    response = client.get("/v1/budgets/current", params={"user_id": "user_1"})

    assert response.status_code == 502
    assert "broken" in response.json()["detail"]

    # The same budget supplied by the caller is still their error
    posted = client.post("/v1/budgets/assessment", json={"budgets": [budget_payload(id="broken", limit=0)]})
    assert posted.status_code == 422


@patch("finzen_health.infrastructure.clients.reporting.ReportingClient.get_period_metrics", new_callable=AsyncMock)
def test_current_vibe_invalid_upstream_metrics_is_bad_gateway(mock_metrics: AsyncMock, client: TestClient):
    mock_metrics.return_value = PeriodMetrics(volatility=-1, burn_rate=100, runway_days=10)

    response = client.get("/v1/vibe/current", params={"user_id": "user_1"})

    assert response.status_code == 502
