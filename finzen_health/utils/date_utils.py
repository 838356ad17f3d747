"""Calendar helpers for the caller side; the domain layer does no date arithmetic"""

import calendar
from datetime import date
from typing import Tuple


def month_bounds(today: date) -> Tuple[date, date]:
    """First and last day of the month containing today"""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def period_position(start: date, end: date, today: date) -> Tuple[int, int]:
    """
    Position of today within an inclusive [start, end] budget period.

    Today counts as elapsed, so the 20th of a 30-day month gives (30, 20)
    and leaves 10 days to extrapolate over. Elapsed is clamped into
    [0, total] for days before or after the period.

    Returns: (period_total_days, period_elapsed_days)
    """
    if end < start:
        raise ValueError(f"Period end {end} is before start {start}")

    total = (end - start).days + 1
    elapsed = (today - start).days + 1
    return total, max(0, min(total, elapsed))


def parse_date(value: str) -> date:
    """Accept plain dates or ISO datetimes ("2025-03-01T00:00:00.000Z")"""
    return date.fromisoformat(value[:10])
