from __future__ import annotations

from datetime import date, timedelta

import pytest

from klb.models import DEFAULT_CONFIG, Day, KLBConfig, Lesson
from klb.scoring import (
    DayScorer,
    ScoringContext,
    alternation_rule,
    deadline_urgency_rule,
    load_rule,
    subject_batching_rule,
)

MONDAY = date(2024, 1, 1)


def _lesson(lesson_id: str, difficulty: str = "easy", minutes: float = 30, subject: str = "Physics", **extra) -> Lesson:
    return Lesson(id=lesson_id, subject=subject, title=lesson_id, difficulty=difficulty, estimated_minutes=minutes, **extra)


def _context(lesson: Lesson, day: Day | None = None, previous_day_load: float = 5.0, config: KLBConfig = DEFAULT_CONFIG) -> ScoringContext:
    day = day or Day(id="d1", date=MONDAY)
    return ScoringContext(
        day=day,
        lesson=lesson,
        current_load=sum(2.0 for _ in day.lessons),
        lesson_load=2.0,
        previous_day_load=previous_day_load,
        config=config,
    )


def test_neutral_previous_day_only_applies_load_penalty() -> None:
    scorer = DayScorer(DEFAULT_CONFIG)

    assert scorer.score(Day(id="d1", date=MONDAY), _lesson("m", "medium", 45), previous_day_load=5) == 70


def test_load_rule_penalises_resulting_load() -> None:
    day = Day(id="d1", date=MONDAY, lessons=[_lesson("a")])

    assert load_rule(_context(_lesson("b"), day)) == -20


@pytest.mark.parametrize(
    ("difficulty", "previous_load", "expected"),
    [
        ("easy", 8, 20),
        ("hard", 8, -15),
        ("medium", 8, 0),
        ("hard", 2, 10),
        ("easy", 2, 0),
        ("hard", 5, 0),
    ],
)
def test_alternation_rule(difficulty: str, previous_load: float, expected: float) -> None:
    assert alternation_rule(_context(_lesson("x", difficulty), previous_day_load=previous_load)) == expected


def test_alternation_rule_can_be_disabled() -> None:
    config = KLBConfig(prefer_heavy_light_alternation=False)

    assert alternation_rule(_context(_lesson("x", "easy"), previous_day_load=9, config=config)) == 0


@pytest.mark.parametrize(("days_ahead", "expected"), [(0, 30), (2, 30), (3, 15), (5, 15), (6, 0)])
def test_deadline_urgency_rule(days_ahead: int, expected: float) -> None:
    lesson = _lesson("x", deadline=MONDAY + timedelta(days=days_ahead))

    assert deadline_urgency_rule(_context(lesson)) == expected


def test_deadline_urgency_ignores_open_lessons() -> None:
    assert deadline_urgency_rule(_context(_lesson("x"))) == 0


def test_subject_batching_rule() -> None:
    one = Day(id="d1", date=MONDAY, lessons=[_lesson("a")])
    two = Day(id="d1", date=MONDAY, lessons=[_lesson("a"), _lesson("b")])
    other = Day(id="d1", date=MONDAY, lessons=[_lesson("a", subject="English")])

    assert subject_batching_rule(_context(_lesson("x"), one)) == 10
    assert subject_batching_rule(_context(_lesson("x"), two)) == -10
    assert subject_batching_rule(_context(_lesson("x"), other)) == 0


def test_hard_lesson_after_heavy_day() -> None:
    scorer = DayScorer(DEFAULT_CONFIG)

    assert scorer.score(Day(id="d2", date=MONDAY), _lesson("h", "hard", 60), previous_day_load=8) == 25
    assert scorer.score(Day(id="d2", date=MONDAY), _lesson("e", "easy", 30), previous_day_load=8) == 110


def test_score_is_floored_at_zero() -> None:
    crowded = Day(id="d1", date=MONDAY, lessons=[_lesson("a", "hard", 60), _lesson("b", "hard", 60)])

    assert DayScorer().score(crowded, _lesson("c", "hard", 60, subject="Math"), previous_day_load=5) == 0


def test_custom_rule_set_replaces_defaults() -> None:
    lesson = _lesson("x", "hard", 60, deadline=MONDAY)
    scorer = DayScorer(DEFAULT_CONFIG, rules=[load_rule])

    assert scorer.rules == (load_rule,)
    assert scorer.score(Day(id="d1", date=MONDAY), lesson, previous_day_load=0) == 40
