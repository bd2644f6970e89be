"""Heuristic fitness of a candidate day for a lesson.

Each rule looks at one concern and returns an adjustment; ``DayScorer`` adds
the adjustments to ``BASE_SCORE`` and floors the total at zero. Rules can be
tuned or swapped without touching the placement loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from .load_model import calculate_day_load, calculate_lesson_load
from .models import DEFAULT_CONFIG, Day, KLBConfig, Lesson

BASE_SCORE = 100.0
LOAD_PENALTY_PER_POINT = 5.0
HEAVY_PREVIOUS_DAY_RATIO = 0.7
LIGHT_PREVIOUS_DAY_RATIO = 0.3
RECOVERY_EASY_BONUS = 20.0
RECOVERY_HARD_PENALTY = 15.0
SPARE_CAPACITY_HARD_BONUS = 10.0
URGENT_DEADLINE_DAYS = 2
URGENT_DEADLINE_BONUS = 30.0
NEAR_DEADLINE_DAYS = 5
NEAR_DEADLINE_BONUS = 15.0
SUBJECT_PAIR_BONUS = 10.0
SUBJECT_MONOTONY_PENALTY = 10.0


@dataclass(frozen=True)
class ScoringContext:
    day: Day
    lesson: Lesson
    current_load: float
    lesson_load: float
    previous_day_load: float
    config: KLBConfig


ScoringRule = Callable[[ScoringContext], float]


def load_rule(context: ScoringContext) -> float:
    return -LOAD_PENALTY_PER_POINT * (context.current_load + context.lesson_load)


def alternation_rule(context: ScoringContext) -> float:
    config = context.config
    if not config.prefer_heavy_light_alternation:
        return 0.0
    adjustment = 0.0
    difficulty = context.lesson.difficulty
    if context.previous_day_load > config.max_cognitive_load * HEAVY_PREVIOUS_DAY_RATIO:
        if difficulty == "easy":
            adjustment += RECOVERY_EASY_BONUS
        elif difficulty == "hard":
            adjustment -= RECOVERY_HARD_PENALTY
    if context.previous_day_load < config.max_cognitive_load * LIGHT_PREVIOUS_DAY_RATIO:
        if difficulty == "hard":
            adjustment += SPARE_CAPACITY_HARD_BONUS
    return adjustment


def deadline_urgency_rule(context: ScoringContext) -> float:
    deadline = context.lesson.deadline
    if deadline is None:
        return 0.0
    days_until_deadline = (deadline - context.day.date).days
    if days_until_deadline <= URGENT_DEADLINE_DAYS:
        return URGENT_DEADLINE_BONUS
    if days_until_deadline <= NEAR_DEADLINE_DAYS:
        return NEAR_DEADLINE_BONUS
    return 0.0


def subject_batching_rule(context: ScoringContext) -> float:
    same_subject = sum(1 for lesson in context.day.lessons if lesson.subject == context.lesson.subject)
    if same_subject == 1:
        return SUBJECT_PAIR_BONUS
    if same_subject >= 2:
        return -SUBJECT_MONOTONY_PENALTY
    return 0.0


DEFAULT_RULES: tuple[ScoringRule, ...] = (
    load_rule,
    alternation_rule,
    deadline_urgency_rule,
    subject_batching_rule,
)


class DayScorer:
    """Sums independent scoring rules for a (day, lesson) pair."""

    def __init__(self, config: KLBConfig = DEFAULT_CONFIG, rules: Sequence[ScoringRule] = DEFAULT_RULES) -> None:
        self._config = config
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[ScoringRule, ...]:
        return self._rules

    def score(self, day: Day, lesson: Lesson, previous_day_load: float = 0.0) -> float:
        context = ScoringContext(
            day=day,
            lesson=lesson,
            current_load=calculate_day_load(day.lessons, self._config),
            lesson_load=calculate_lesson_load(lesson, self._config),
            previous_day_load=previous_day_load,
            config=self._config,
        )
        total = BASE_SCORE + sum(rule(context) for rule in self._rules)
        return max(0.0, total)


__all__ = [
    "BASE_SCORE",
    "DEFAULT_RULES",
    "DayScorer",
    "ScoringContext",
    "ScoringRule",
    "alternation_rule",
    "deadline_urgency_rule",
    "load_rule",
    "subject_batching_rule",
]
