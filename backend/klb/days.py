"""Builders for empty day sequences."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Collection, List, Optional

from .errors import ConfigurationError
from .models import Day


def day_id_for(day: date) -> str:
    return f"day-{day.isoformat()}"


def build_day_sequence(
    start: date,
    count: int,
    *,
    skip_weekdays: Collection[int] = (),
    max_capacity: Optional[int] = None,
    cognitive_load_limit: Optional[float] = None,
) -> List[Day]:
    """Return ``count`` consecutive empty days from ``start``.

    ``skip_weekdays`` uses ``date.weekday()`` numbering (Monday is 0); skipped
    dates do not count towards ``count``.
    """
    if count < 0:
        raise ConfigurationError(f"Day count cannot be negative (got {count}).")
    if len(set(skip_weekdays)) >= 7:
        raise ConfigurationError("At least one weekday must remain available.")

    days: List[Day] = []
    current = start
    while len(days) < count:
        if current.weekday() not in skip_weekdays:
            days.append(
                Day(
                    id=day_id_for(current),
                    date=current,
                    max_capacity=max_capacity,
                    cognitive_load_limit=cognitive_load_limit,
                )
            )
        current += timedelta(days=1)
    return days


__all__ = ["build_day_sequence", "day_id_for"]
