"""Hard constraints gating whether a lesson may land on a day."""

from __future__ import annotations

from datetime import date
from typing import Mapping

from .load_model import calculate_day_load, calculate_lesson_load, day_capacity, day_load_limit
from .models import DEFAULT_CONFIG, Day, FeasibilityResult, KLBConfig, Lesson

AT_CAPACITY = "Day at capacity"
OVER_LOAD_LIMIT = "Would exceed cognitive load limit"
PAST_DEADLINE = "Past deadline"


def can_schedule_lesson(
    day: Day,
    lesson: Lesson,
    scheduled_dates: Mapping[str, date],
    config: KLBConfig = DEFAULT_CONFIG,
) -> FeasibilityResult:
    """Check capacity, load ceiling, deadline and prerequisite dates, in that order.

    ``scheduled_dates`` maps already placed lesson ids to the date they were
    placed on. A prerequisite only counts when it sits on a strictly earlier date.
    """
    if len(day.lessons) >= day_capacity(day, config):
        return FeasibilityResult(False, AT_CAPACITY)

    current_load = calculate_day_load(day.lessons, config)
    if current_load + calculate_lesson_load(lesson, config) > day_load_limit(day, config):
        return FeasibilityResult(False, OVER_LOAD_LIMIT)

    if config.respect_deadlines and lesson.deadline is not None and day.date > lesson.deadline:
        return FeasibilityResult(False, PAST_DEADLINE)

    if config.enforce_dependencies:
        for dependency_id in lesson.dependencies:
            dependency_date = scheduled_dates.get(dependency_id)
            if dependency_date is None or dependency_date >= day.date:
                return FeasibilityResult(False, f"Dependency {dependency_id} not completed")

    return FeasibilityResult(True)


__all__ = ["AT_CAPACITY", "OVER_LOAD_LIMIT", "PAST_DEADLINE", "can_schedule_lesson"]
