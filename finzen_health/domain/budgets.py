"""Budget progress, status and period-end overspend projection"""

import math
from decimal import Decimal
from statistics import fmean
from typing import List, Optional

from finzen_health.domain.exceptions import InvalidBudgetError
from finzen_health.domain.models import (
    BestBudget,
    BudgetAssessment,
    BudgetSnapshot,
    BudgetStatus,
    BudgetSummary,
    ControlStatus,
    ProjectionAlert,
)
from finzen_health.domain.policy import DEFAULT_BUDGET_POLICY, BudgetPolicy
from finzen_health.domain.presentation import describe_control
from finzen_health.utils.rounding import round_half_away_from_zero


def validate_budget(budget: BudgetSnapshot) -> None:
    """Reject snapshots that can only come from an upstream bug; nothing is clamped"""
    for name, value in (("limit", budget.limit), ("spent", budget.spent)):
        if value is None or not math.isfinite(value):
            raise InvalidBudgetError(f"Budget {budget.id}: {name} must be a finite number", budget.id)

    if budget.limit <= 0:
        raise InvalidBudgetError(f"Budget {budget.id}: limit must be positive, got {budget.limit}", budget.id)
    if budget.spent < 0:
        raise InvalidBudgetError(f"Budget {budget.id}: spent must be non-negative, got {budget.spent}", budget.id)
    if budget.period_total_days <= 0:
        raise InvalidBudgetError(
            f"Budget {budget.id}: period_total_days must be positive, got {budget.period_total_days}",
            budget.id,
        )
    if not 0 <= budget.period_elapsed_days <= budget.period_total_days:
        raise InvalidBudgetError(
            f"Budget {budget.id}: period_elapsed_days {budget.period_elapsed_days} "
            f"outside [0, {budget.period_total_days}]",
            budget.id,
        )


# Decimal places kept in usage percentages; 18.4 of 23 is 80.0, not 79.99999999999999
USAGE_PRECISION = 9


def calculate_usage(spent: float, limit: float) -> float:
    """Uncapped spent/limit as a percentage"""
    return round(spent * 100 / limit, USAGE_PRECISION)


def reaches_fraction(spent: float, limit: float, fraction: float) -> bool:
    """Exact spent >= fraction * limit; 11.7 reaches 90% of 13"""
    return Decimal(repr(spent)) >= Decimal(repr(fraction)) * Decimal(repr(limit))


def calculate_progress(spent: float, limit: float) -> float:
    """Usage capped at 100 for display"""
    return min(100.0, calculate_usage(spent, limit))


def determine_status(progress_percent: float, policy: BudgetPolicy = DEFAULT_BUDGET_POLICY) -> BudgetStatus:
    """Tiers are inclusive at their lower bound (80 is warning, 100 is danger)"""
    if progress_percent >= policy.danger_percent:
        return BudgetStatus.DANGER
    elif progress_percent >= policy.warning_percent:
        return BudgetStatus.WARNING
    else:
        return BudgetStatus.NORMAL


def project_overspend(budget: BudgetSnapshot, policy: BudgetPolicy = DEFAULT_BUDGET_POLICY) -> Optional[float]:
    """
    Extrapolate the average daily spend to period end.

    Returns None when the projection does not apply:
    - less than 90% of the limit spent (avoids noisy early-period alerts)
    - no elapsed days (no basis for a daily average)
    - no remaining days (the period is already over)

    Otherwise returns the projected excess over the limit, 0.0 if none.

    Example:
        limit 1000, spent 950, day 20 of 30
        daily 47.5 * 10 remaining days = 475 -> projected 1425 -> overspend 425
    """
    if not reaches_fraction(budget.spent, budget.limit, policy.projection_trigger):
        return None

    elapsed = budget.period_elapsed_days
    remaining_days = budget.period_total_days - elapsed
    if elapsed <= 0 or remaining_days <= 0:
        return None

    daily_average = budget.spent / elapsed
    projected_total = budget.spent + daily_average * remaining_days

    return max(0.0, projected_total - budget.limit)


class BudgetProjector:
    """Stateless projector; safe to share across requests"""

    def __init__(self, policy: BudgetPolicy = DEFAULT_BUDGET_POLICY):
        self.policy = policy

    def assess_one(self, budget: BudgetSnapshot) -> BudgetAssessment:
        """
        Assess a single budget.

        Raises:
            InvalidBudgetError: non-positive limit, negative spend, or bad period position
        """
        validate_budget(budget)

        progress = calculate_progress(budget.spent, budget.limit)

        return BudgetAssessment(
            budget_id=budget.id,
            name=budget.name,
            limit=budget.limit,
            spent=budget.spent,
            remaining=budget.limit - budget.spent,
            usage_percent=calculate_usage(budget.spent, budget.limit),
            progress_percent=progress,
            status=determine_status(progress, self.policy),
            projected_overspend=project_overspend(budget, self.policy),
        )

    def assess_all(self, budgets: List[BudgetSnapshot]) -> List[BudgetAssessment]:
        """One assessment per budget, same order. Any invalid budget fails the whole batch."""
        return [self.assess_one(budget) for budget in budgets]

    def summarize(self, budgets: List[BudgetSnapshot]) -> BudgetSummary:
        """Aggregate totals, control status, best budget and projection alerts"""
        return summarize_assessments(self.assess_all(budgets), self.policy)


def _find_best_budget(assessments: List[BudgetAssessment], policy: BudgetPolicy) -> Optional[BestBudget]:
    # Highest usage that is still within the limit
    candidates = [
        a for a in assessments
        if a.spent <= a.limit and a.usage_percent >= policy.best_budget_min_usage
    ]
    if not candidates:
        return None

    best = max(candidates, key=lambda a: a.usage_percent)
    return BestBudget(budget_id=best.budget_id, name=best.name, usage_percent=best.usage_percent)


def summarize_assessments(
    assessments: List[BudgetAssessment], policy: BudgetPolicy = DEFAULT_BUDGET_POLICY
) -> BudgetSummary:
    """
    Build the period summary from already-computed assessments.

    Control status uses the mean of capped progress, independent of the
    vibe attention score:
    - < 60: well controlled ("N% bajo control", N = unused share)
    - < 80: normal control
    - else: tight control
    """
    total_limit = sum(a.limit for a in assessments)
    total_spent = sum(a.spent for a in assessments)

    if not assessments:
        display = describe_control(ControlStatus.NO_BUDGETS)
        return BudgetSummary(
            total_limit=0.0,
            total_spent=0.0,
            remaining=0.0,
            average_usage=0.0,
            control_status=ControlStatus.NO_BUDGETS,
            control_label=display.label,
            control_icon=display.emoji,
        )

    average_usage = fmean(a.progress_percent for a in assessments)

    well_controlled, normal = policy.control_bands
    if average_usage < well_controlled:
        control_status = ControlStatus.WELL_CONTROLLED
    elif average_usage < normal:
        control_status = ControlStatus.NORMAL
    else:
        control_status = ControlStatus.TIGHT

    display = describe_control(control_status, round_half_away_from_zero(100 - average_usage))

    alerts = [
        ProjectionAlert(budget_id=a.budget_id, name=a.name, excess=a.projected_overspend)
        for a in assessments
        if a.projected_overspend is not None and a.projected_overspend > 0
    ]

    return BudgetSummary(
        total_limit=total_limit,
        total_spent=total_spent,
        remaining=total_limit - total_spent,
        average_usage=average_usage,
        control_status=control_status,
        control_label=display.label,
        control_icon=display.emoji,
        best_budget=_find_best_budget(assessments, policy),
        projection_alerts=alerts,
    )


def assess_budget(budget: BudgetSnapshot, policy: BudgetPolicy = DEFAULT_BUDGET_POLICY) -> BudgetAssessment:
    return BudgetProjector(policy).assess_one(budget)


def assess_budgets(
    budgets: List[BudgetSnapshot], policy: BudgetPolicy = DEFAULT_BUDGET_POLICY
) -> List[BudgetAssessment]:
    return BudgetProjector(policy).assess_all(budgets)


def summarize_budgets(budgets: List[BudgetSnapshot], policy: BudgetPolicy = DEFAULT_BUDGET_POLICY) -> BudgetSummary:
    return BudgetProjector(policy).summarize(budgets)
