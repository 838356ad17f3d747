"""Financial vibe scoring - turns period spend metrics into levels, an attention score and advice"""

import math
from typing import Callable, List, Optional, Tuple

from finzen_health.domain.exceptions import InvalidMetricsError
from finzen_health.domain.models import (
    Advice,
    AttentionBand,
    BurnRateLevel,
    PeriodMetrics,
    RunwayLevel,
    VibeAssessment,
    VolatilityLevel,
)
from finzen_health.domain.policy import DEFAULT_VIBE_POLICY, VibePolicy
from finzen_health.domain.presentation import advice_text
from finzen_health.utils.rounding import round_half_away_from_zero


def validate_metrics(metrics: PeriodMetrics) -> None:
    """Reject metrics an upstream aggregation bug could have produced"""
    for name, value in (("volatility", metrics.volatility), ("burn_rate", metrics.burn_rate)):
        if value is None or not math.isfinite(value):
            raise InvalidMetricsError(f"{name} must be a finite number, got {value!r}")
        if value < 0:
            raise InvalidMetricsError(f"{name} must be non-negative, got {value}")

    runway = metrics.runway_days
    if runway is not None:
        if not math.isfinite(runway):
            raise InvalidMetricsError(f"runway_days must be finite or None, got {runway!r}")
        if runway < 0:
            raise InvalidMetricsError(f"runway_days must be non-negative, got {runway}")


def effective_runway(runway_days: Optional[float]) -> float:
    """Undefined runway is scored exactly like zero days"""
    return runway_days if runway_days is not None else 0.0


def classify_volatility(volatility: float, policy: VibePolicy = DEFAULT_VIBE_POLICY) -> VolatilityLevel:
    caos, wild, chill = policy.volatility_thresholds
    if volatility > caos:
        return VolatilityLevel.CAOS
    elif volatility > wild:
        return VolatilityLevel.WILD
    elif volatility > chill:
        return VolatilityLevel.CHILL
    else:
        return VolatilityLevel.ZEN


def classify_burn_rate(burn_rate: float, policy: VibePolicy = DEFAULT_VIBE_POLICY) -> BurnRateLevel:
    millionaire, fast, normal = policy.burn_rate_thresholds
    if burn_rate > millionaire:
        return BurnRateLevel.MILLIONAIRE
    elif burn_rate > fast:
        return BurnRateLevel.FAST
    elif burn_rate > normal:
        return BurnRateLevel.NORMAL
    else:
        return BurnRateLevel.AHORRO


def classify_runway(runway_days: Optional[float], policy: VibePolicy = DEFAULT_VIBE_POLICY) -> RunwayLevel:
    days = effective_runway(runway_days)
    danger, tight, getting_by = policy.runway_thresholds
    if days <= danger:
        return RunwayLevel.DANGER
    elif days <= tight:
        return RunwayLevel.TIGHT
    elif days <= getting_by:
        return RunwayLevel.GETTING_BY
    else:
        return RunwayLevel.STABLE


def calculate_sub_scores(
    metrics: PeriodMetrics, policy: VibePolicy = DEFAULT_VIBE_POLICY
) -> Tuple[float, float, float]:
    """
    Normalise each raw metric to a 0-100 "badness" score.

    Returns: (volatility_score, burn_rate_score, runway_score)
    """
    volatility_score = min(100.0, metrics.volatility / policy.volatility_cap * 100)
    burn_rate_score = min(100.0, metrics.burn_rate / policy.burn_rate_cap * 100)

    # Shorter runway is worse
    runway = effective_runway(metrics.runway_days)
    runway_score = max(0.0, 100 - min(100.0, runway / policy.runway_horizon_days * 100))

    return volatility_score, burn_rate_score, runway_score


def calculate_attention_score(
    metrics: PeriodMetrics, policy: VibePolicy = DEFAULT_VIBE_POLICY
) -> int:
    """
    Composite 0-100 attention score, higher = more concerning.

    Scoring weights (defaults):
    - 30%: Volatility (saturates at 5000)
    - 30%: Burn rate (saturates at 1200/day)
    - 40%: Runway (0 days = 100, 30+ days = 0), the leading indicator of cash-out

    Only the weighted sum is rounded.
    """
    return combine_sub_scores(*calculate_sub_scores(metrics, policy), policy=policy)


def combine_sub_scores(
    volatility_score: float,
    burn_rate_score: float,
    runway_score: float,
    policy: VibePolicy = DEFAULT_VIBE_POLICY,
) -> int:
    weighted = (
        policy.volatility_weight * volatility_score
        + policy.burn_rate_weight * burn_rate_score
        + policy.runway_weight * runway_score
    )
    return round_half_away_from_zero(weighted)


def determine_attention_band(score: int, policy: VibePolicy = DEFAULT_VIBE_POLICY) -> AttentionBand:
    critical, high, moderate = policy.attention_bands
    if score >= critical:
        return AttentionBand.CRITICAL
    elif score >= high:
        return AttentionBand.HIGH
    elif score >= moderate:
        return AttentionBand.MODERATE
    else:
        return AttentionBand.LOW


AdviceRule = Tuple[Callable[[VolatilityLevel, BurnRateLevel, RunwayLevel], bool], Advice]

# Evaluated top to bottom, first match wins. Order matters: the first two
# rules both need a danger runway.
ADVICE_RULES: List[AdviceRule] = [
    (
        lambda vol, burn, runway: runway == RunwayLevel.DANGER and burn == BurnRateLevel.MILLIONAIRE,
        Advice.STOP_SPENDING,
    ),
    (lambda vol, burn, runway: runway == RunwayLevel.DANGER, Advice.INCREASE_INCOME),
    (lambda vol, burn, runway: vol == VolatilityLevel.CAOS, Advice.CONTROL_SPENDING),
    (lambda vol, burn, runway: burn == BurnRateLevel.MILLIONAIRE, Advice.REDUCE_DAILY_SPEND),
    (lambda vol, burn, runway: runway == RunwayLevel.TIGHT, Advice.SAVE_MORE),
]
DEFAULT_ADVICE = Advice.KEEP_IT_UP


def select_advice(
    volatility_level: VolatilityLevel,
    burn_rate_level: BurnRateLevel,
    runway_level: RunwayLevel,
    rules: List[AdviceRule] = ADVICE_RULES,
) -> Advice:
    for predicate, advice in rules:
        if predicate(volatility_level, burn_rate_level, runway_level):
            return advice
    return DEFAULT_ADVICE


class VibeScorer:
    """Stateless scorer; safe to share across requests"""

    def __init__(self, policy: VibePolicy = DEFAULT_VIBE_POLICY):
        self.policy = policy

    def assess(self, metrics: PeriodMetrics) -> VibeAssessment:
        """
        Classify metrics and build the full assessment.

        Raises:
            InvalidMetricsError: negative or non-finite inputs
        """
        validate_metrics(metrics)

        volatility_level = classify_volatility(metrics.volatility, self.policy)
        burn_rate_level = classify_burn_rate(metrics.burn_rate, self.policy)
        runway_level = classify_runway(metrics.runway_days, self.policy)

        volatility_score, burn_rate_score, runway_score = calculate_sub_scores(metrics, self.policy)
        attention_score = combine_sub_scores(volatility_score, burn_rate_score, runway_score, self.policy)
        advice = select_advice(volatility_level, burn_rate_level, runway_level)

        return VibeAssessment(
            volatility_level=volatility_level,
            burn_rate_level=burn_rate_level,
            runway_level=runway_level,
            volatility_score=volatility_score,
            burn_rate_score=burn_rate_score,
            runway_score=runway_score,
            attention_score=attention_score,
            attention_band=determine_attention_band(attention_score, self.policy),
            advice_code=advice,
            advice=advice_text(advice),
            volatility=metrics.volatility,
            burn_rate=metrics.burn_rate,
            runway_days=metrics.runway_days,
        )


def assess_vibe(metrics: PeriodMetrics, policy: VibePolicy = DEFAULT_VIBE_POLICY) -> VibeAssessment:
    """Main entry point for one-off scoring with a given policy"""
    return VibeScorer(policy).assess(metrics)
