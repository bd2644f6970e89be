"""Cognitive-load figures for lessons and days."""

from __future__ import annotations

import math
from typing import Iterable, List, Union

from .models import DEFAULT_CONFIG, DIFFICULTIES, Day, DayLoadSummary, KLBConfig, Lesson, LoadLevel
from .ordering import DIFFICULTY_RANK

BASE_SESSION_MINUTES = 30
MAX_DURATION_MULTIPLIER = 2.0
LIGHT_LOAD_RATIO = 0.3
MODERATE_LOAD_RATIO = 0.7


def round_tenth(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def calculate_lesson_load(lesson: Lesson, config: KLBConfig = DEFAULT_CONFIG) -> float:
    base_load = config.difficulty_weights.weight_for(lesson.difficulty)
    multiplier = min(lesson.estimated_minutes / BASE_SESSION_MINUTES, MAX_DURATION_MULTIPLIER)
    return round_tenth(base_load * multiplier)


def calculate_day_load(lessons: Union[Day, Iterable[Lesson]], config: KLBConfig = DEFAULT_CONFIG) -> float:
    if isinstance(lessons, Day):
        lessons = lessons.lessons
    return round_tenth(sum((calculate_lesson_load(lesson, config) for lesson in lessons), 0.0))


def day_capacity(day: Day, config: KLBConfig = DEFAULT_CONFIG) -> int:
    if day.max_capacity is None:
        return config.max_lessons_per_day
    return min(day.max_capacity, config.max_lessons_per_day)


def day_load_limit(day: Day, config: KLBConfig = DEFAULT_CONFIG) -> float:
    if day.cognitive_load_limit is None:
        return config.max_cognitive_load
    return min(day.cognitive_load_limit, config.max_cognitive_load)


def load_level(load: float, limit: float) -> LoadLevel:
    if load > limit:
        return "overloaded"
    if load >= limit * MODERATE_LOAD_RATIO:
        return "heavy"
    if load >= limit * LIGHT_LOAD_RATIO:
        return "moderate"
    return "light"


def analyze_day(day: Day, config: KLBConfig = DEFAULT_CONFIG) -> DayLoadSummary:
    """Summarise a day for load meters; lessons are recommended hardest first."""
    load = calculate_day_load(day.lessons, config)
    limit = day_load_limit(day, config)
    breakdown = {difficulty: 0 for difficulty in DIFFICULTIES}
    for lesson in day.lessons:
        breakdown[lesson.difficulty] += 1
    ordered = sorted(
        day.lessons,
        key=lambda lesson: (DIFFICULTY_RANK[lesson.difficulty], -calculate_lesson_load(lesson, config)),
    )
    return DayLoadSummary(
        day_id=day.id,
        load=round_tenth(load),
        load_limit=limit,
        load_level=load_level(load, limit),
        lesson_count=len(day.lessons),
        difficulty_breakdown=breakdown,
        recommended_order=[lesson.id for lesson in ordered],
    )


def analyze_days(days: Iterable[Day], config: KLBConfig = DEFAULT_CONFIG) -> List[DayLoadSummary]:
    return [analyze_day(day, config) for day in days]


__all__ = [
    "analyze_day",
    "analyze_days",
    "calculate_day_load",
    "calculate_lesson_load",
    "day_capacity",
    "day_load_limit",
    "load_level",
    "round_tenth",
]
