"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional

from finzen_health.domain.models import (
    BudgetAssessment,
    BudgetSnapshot,
    BudgetSummary,
    PeriodMetrics,
    VibeAssessment,
)
from finzen_health.domain.presentation import describe_burn_rate, describe_runway, describe_volatility


# Request bodies only check shape; range checks happen in the domain validators.


class PeriodMetricsRequest(BaseModel):
    """Request body for POST /v1/vibe"""

    volatility: float = Field(..., description="Dispersion of daily net spend")
    burn_rate: float = Field(..., alias="burnRate", description="Average daily spend")
    runway_days: Optional[float] = Field(None, alias="runwayDays", description="Days until funds run out; null = none projected")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> PeriodMetrics:
        return PeriodMetrics(volatility=self.volatility, burn_rate=self.burn_rate, runway_days=self.runway_days)


class LevelSchema(BaseModel):
    level: str
    emoji: str
    label: str


class VibeResponse(BaseModel):
    """Response for vibe endpoints"""

    volatility: LevelSchema
    burn_rate: LevelSchema
    runway: LevelSchema
    volatility_value: float
    burn_rate_value: float
    runway_value: Optional[float] = None
    attention_score: int
    attention_band: str
    advice_code: str
    advice: str

    @classmethod
    def from_domain(cls, assessment: VibeAssessment) -> "VibeResponse":
        volatility = describe_volatility(assessment.volatility_level)
        burn_rate = describe_burn_rate(assessment.burn_rate_level)
        runway = describe_runway(assessment.runway_level)
        return cls(
            volatility=LevelSchema(level=assessment.volatility_level.value, emoji=volatility.emoji, label=volatility.label),
            burn_rate=LevelSchema(level=assessment.burn_rate_level.value, emoji=burn_rate.emoji, label=burn_rate.label),
            runway=LevelSchema(level=assessment.runway_level.value, emoji=runway.emoji, label=runway.label),
            volatility_value=assessment.volatility,
            burn_rate_value=assessment.burn_rate,
            runway_value=assessment.runway_days,
            attention_score=assessment.attention_score,
            attention_band=assessment.attention_band.value,
            advice_code=assessment.advice_code.value,
            advice=assessment.advice,
        )


class BudgetSnapshotSchema(BaseModel):
    """Single budget in POST /v1/budgets/assessment"""

    id: str = Field(..., min_length=1)
    name: str
    limit: float
    spent: float
    period_total_days: int
    period_elapsed_days: int

    def to_domain(self) -> BudgetSnapshot:
        return BudgetSnapshot(
            id=self.id,
            name=self.name,
            limit=self.limit,
            spent=self.spent,
            period_total_days=self.period_total_days,
            period_elapsed_days=self.period_elapsed_days,
        )


class BudgetAssessmentRequest(BaseModel):
    """Request body for POST /v1/budgets/assessment"""

    budgets: List[BudgetSnapshotSchema]


class BudgetAssessmentSchema(BaseModel):
    budget_id: str
    name: str
    limit: float
    spent: float
    remaining: float
    progress_percent: float
    status: str
    projected_overspend: Optional[float] = None

    @classmethod
    def from_domain(cls, assessment: BudgetAssessment) -> "BudgetAssessmentSchema":
        return cls(
            budget_id=assessment.budget_id,
            name=assessment.name,
            limit=assessment.limit,
            spent=assessment.spent,
            remaining=assessment.remaining,
            progress_percent=assessment.progress_percent,
            status=assessment.status.value,
            projected_overspend=assessment.projected_overspend,
        )


class ProjectionAlertSchema(BaseModel):
    budget_id: str
    name: str
    excess: float


class BestBudgetSchema(BaseModel):
    budget_id: str
    name: str
    usage_percent: float


class BudgetSummarySchema(BaseModel):
    total_limit: float
    total_spent: float
    remaining: float
    average_usage: float
    control_status: str
    control_label: str
    control_icon: str
    best_budget: Optional[BestBudgetSchema] = None
    projection_alerts: List[ProjectionAlertSchema]

    @classmethod
    def from_domain(cls, summary: BudgetSummary) -> "BudgetSummarySchema":
        best = summary.best_budget
        return cls(
            total_limit=summary.total_limit,
            total_spent=summary.total_spent,
            remaining=summary.remaining,
            average_usage=summary.average_usage,
            control_status=summary.control_status.value,
            control_label=summary.control_label,
            control_icon=summary.control_icon,
            best_budget=(
                BestBudgetSchema(budget_id=best.budget_id, name=best.name, usage_percent=best.usage_percent)
                if best
                else None
            ),
            projection_alerts=[
                ProjectionAlertSchema(budget_id=a.budget_id, name=a.name, excess=a.excess)
                for a in summary.projection_alerts
            ],
        )


class BudgetAssessmentResponse(BaseModel):
    """Response for budget endpoints"""

    assessments: List[BudgetAssessmentSchema]
    summary: BudgetSummarySchema
