"""Domain models - pure Python dataclasses representing financial-health inputs and results"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class VolatilityLevel(str, Enum):
    ZEN = "zen"
    CHILL = "chill"
    WILD = "wild"
    CAOS = "caos"


class BurnRateLevel(str, Enum):
    AHORRO = "ahorro"
    NORMAL = "normal"
    FAST = "fast"
    MILLIONAIRE = "millionaire"


class RunwayLevel(str, Enum):
    DANGER = "danger"
    TIGHT = "tight"
    GETTING_BY = "getting-by"
    STABLE = "stable"


class Advice(str, Enum):
    """Which advice rule fired"""

    STOP_SPENDING = "stop_spending"
    INCREASE_INCOME = "increase_income"
    CONTROL_SPENDING = "control_spending"
    REDUCE_DAILY_SPEND = "reduce_daily_spend"
    SAVE_MORE = "save_more"
    KEEP_IT_UP = "keep_it_up"


class AttentionBand(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class BudgetStatus(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"


class ControlStatus(str, Enum):
    NO_BUDGETS = "no_budgets"
    WELL_CONTROLLED = "well_controlled"
    NORMAL = "normal"
    TIGHT = "tight"


@dataclass(frozen=True)
class PeriodMetrics:
    """Aggregated spending metrics for a closed reporting window"""

    volatility: float
    burn_rate: float
    runway_days: Optional[float] = None  # None = no cash-out projected


@dataclass(frozen=True)
class VibeAssessment:
    """Output of the vibe scorer"""

    volatility_level: VolatilityLevel
    burn_rate_level: BurnRateLevel
    runway_level: RunwayLevel
    volatility_score: float
    burn_rate_score: float
    runway_score: float
    attention_score: int
    attention_band: AttentionBand
    advice_code: Advice
    advice: str
    volatility: float
    burn_rate: float
    runway_days: Optional[float]


@dataclass(frozen=True)
class BudgetSnapshot:
    """Budget position within its current period, supplied by the caller"""

    id: str
    name: str
    limit: float
    spent: float
    period_total_days: int
    period_elapsed_days: int


@dataclass(frozen=True)
class BudgetAssessment:
    """Progress, status and projection for a single budget"""

    budget_id: str
    name: str
    limit: float
    spent: float
    remaining: float
    usage_percent: float  # uncapped
    progress_percent: float  # capped at 100
    status: BudgetStatus
    projected_overspend: Optional[float]


@dataclass(frozen=True)
class ProjectionAlert:
    """Budget expected to end the period over its limit"""

    budget_id: str
    name: str
    excess: float


@dataclass(frozen=True)
class BestBudget:
    """Most-used budget that is still within its limit"""

    budget_id: str
    name: str
    usage_percent: float


@dataclass(frozen=True)
class BudgetSummary:
    """Aggregate view across all budgets of a period"""

    total_limit: float
    total_spent: float
    remaining: float
    average_usage: float
    control_status: ControlStatus
    control_label: str
    control_icon: str
    best_budget: Optional[BestBudget] = None
    projection_alerts: List[ProjectionAlert] = field(default_factory=list)
