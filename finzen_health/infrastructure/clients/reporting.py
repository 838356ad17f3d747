"""Reporting API HTTP client for fetching period metrics and active budgets"""

import httpx
from datetime import date
from typing import Any, Dict, List, Optional
from finzen_health.domain.models import BudgetSnapshot, PeriodMetrics
from finzen_health.domain.exceptions import ReportingAPIError
from finzen_health.utils.date_utils import parse_date, period_position
from finzen_health.config import settings


class ReportingClient:
    """Client for the external reporting / budget service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.reporting_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params=params)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise ReportingAPIError(f"Reporting API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ReportingAPIError(f"Reporting API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ReportingAPIError(f"Reporting API unreachable: {e}") from e
            except ValueError as e:
                raise ReportingAPIError(f"Reporting API returned invalid JSON: {e}") from e

    async def get_period_metrics(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        granularity: str = "daily",
    ) -> PeriodMetrics:
        """
        Fetch aggregated metrics for a closed window.

        Missing volatility/burn rate read as 0; missing runway stays None.

        Raises:
            ReportingAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get(
            "/reports/date",
            {
                "user_id": user_id,
                "startDate": start_date.isoformat(),
                "endDate": end_date.isoformat(),
                "granularity": granularity,
                "transactionType": "both",
            },
        )

        try:
            metrics = data["metrics"]
            runway = metrics.get("runway")
            return PeriodMetrics(
                volatility=float(metrics.get("volatility") or 0),
                burn_rate=float(metrics.get("burnRate") or 0),
                runway_days=float(runway) if runway is not None else None,
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise ReportingAPIError(f"Invalid metrics data from reporting API: {e}") from e

    async def get_active_budgets(self, user_id: str, today: Optional[date] = None) -> List[BudgetSnapshot]:
        """
        Fetch budgets active on `today` and place each within its period.

        Inactive budgets and budgets whose window does not contain today are skipped.

        Raises:
            ReportingAPIError: On timeout, HTTP errors, or invalid response
        """
        today = today or date.today()
        data = await self._get("/budgets", {"user_id": user_id})

        try:
            snapshots = []
            for raw in data.get("budgets", []):
                if not raw.get("is_active", True):
                    continue

                start = parse_date(raw["start_date"])
                end = parse_date(raw["end_date"])
                if not start <= today <= end:
                    continue

                total_days, elapsed_days = period_position(start, end, today)
                snapshots.append(
                    BudgetSnapshot(
                        id=str(raw["id"]),
                        name=raw["name"],
                        limit=float(raw["amount"]),
                        spent=float(raw.get("spent") or 0),
                        period_total_days=total_days,
                        period_elapsed_days=elapsed_days,
                    )
                )
            return snapshots

        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise ReportingAPIError(f"Invalid budget data from reporting API: {e}") from e
