"""One-shot relief pass for overloaded days."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .load_model import calculate_day_load, calculate_lesson_load, day_capacity, day_load_limit
from .models import DEFAULT_CONFIG, Day, KLBConfig, Lesson

logger = logging.getLogger(__name__)

OVERLOAD_RATIO = 0.9
RECEIVING_DAY_RATIO = 0.7


def _is_movable(lesson: Lesson) -> bool:
    return lesson.difficulty == "easy" and lesson.deadline is None


def _blocks_dependents(lesson: Lesson, target: Day, config: KLBConfig) -> bool:
    if not config.enforce_dependencies:
        return False
    return any(lesson.id in other.dependencies for other in target.lessons)


def balance_loads(days: Sequence[Day], config: KLBConfig = DEFAULT_CONFIG) -> List[Day]:
    """Move at most one easy, deadline-free lesson off each overloaded day.

    A day is overloaded above 90% of its load limit; the lesson goes to the
    following day only if that day stays at or below 70% of its own limit and
    has a free slot. This is a single forward pass, so residual overload can
    remain. Returns new ``Day`` objects; ``days`` is left untouched.
    """
    balanced = [day.model_copy(deep=True) for day in days]

    for index, day in enumerate(balanced[:-1]):
        if calculate_day_load(day.lessons, config) <= day_load_limit(day, config) * OVERLOAD_RATIO:
            continue
        target = balanced[index + 1]
        target_load = calculate_day_load(target.lessons, config)
        for lesson in [candidate for candidate in day.lessons if _is_movable(candidate)]:
            if len(target.lessons) >= day_capacity(target, config):
                break
            if target_load + calculate_lesson_load(lesson, config) > day_load_limit(target, config) * RECEIVING_DAY_RATIO:
                continue
            if _blocks_dependents(lesson, target, config):
                continue
            day.lessons = [existing for existing in day.lessons if existing.id != lesson.id]
            target.lessons.append(lesson)
            logger.debug("Moved lesson %s from %s to %s to relieve load", lesson.id, day.id, target.id)
            break

    return balanced


__all__ = ["OVERLOAD_RATIO", "RECEIVING_DAY_RATIO", "balance_loads"]
