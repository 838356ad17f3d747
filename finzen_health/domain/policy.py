"""Tunable policy constants for vibe scoring and budget projection.

Defaults match the mobile dashboard. The service can override the weights
and control bands from settings.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from finzen_health.domain.exceptions import PolicyError


@dataclass(frozen=True)
class VibePolicy:
    """Thresholds and weights for the vibe scorer"""

    # Strictly-greater cascades, most severe first: (caos, wild, chill)
    volatility_thresholds: Tuple[float, float, float] = (3000.0, 1500.0, 500.0)
    # (millionaire, fast, normal)
    burn_rate_thresholds: Tuple[float, float, float] = (800.0, 600.0, 300.0)
    # Less-or-equal cascade in days: (danger, tight, getting-by)
    runway_thresholds: Tuple[float, float, float] = (7.0, 15.0, 30.0)

    # Values at which each sub-score saturates at 100
    volatility_cap: float = 5000.0
    burn_rate_cap: float = 1200.0
    runway_horizon_days: float = 30.0

    volatility_weight: float = 0.3
    burn_rate_weight: float = 0.3
    runway_weight: float = 0.4

    # Attention bands, inclusive lower bounds: (critical, high, moderate)
    attention_bands: Tuple[int, int, int] = (80, 60, 40)

    def __post_init__(self):
        weights = (self.volatility_weight, self.burn_rate_weight, self.runway_weight)
        if any(w < 0 for w in weights):
            raise PolicyError(f"Vibe weights must be non-negative, got {weights}")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
            raise PolicyError(f"Vibe weights must sum to 1.0, got {sum(weights)}")
        if min(self.volatility_cap, self.burn_rate_cap, self.runway_horizon_days) <= 0:
            raise PolicyError("Normalisation caps must be positive")


@dataclass(frozen=True)
class BudgetPolicy:
    """Thresholds for budget status, projection and the aggregate summary"""

    warning_percent: float = 80.0
    danger_percent: float = 100.0

    # Fraction of the limit that must be spent before projecting
    projection_trigger: float = 0.9

    # Mean capped progress: below first -> well controlled, below second -> normal
    control_bands: Tuple[float, float] = (60.0, 80.0)

    best_budget_min_usage: float = 50.0

    def __post_init__(self):
        if not 0 < self.warning_percent <= self.danger_percent:
            raise PolicyError("warning_percent must be positive and not above danger_percent")
        if self.control_bands[0] > self.control_bands[1]:
            raise PolicyError(f"Control bands must be ascending, got {self.control_bands}")


DEFAULT_VIBE_POLICY = VibePolicy()
DEFAULT_BUDGET_POLICY = BudgetPolicy()
