from __future__ import annotations

from datetime import date
from typing import List

from klb.models import Day, Lesson
from klb.reschedule import MISSED_REASON, auto_reschedule
from klb.telemetry import RESCHEDULE_PROPOSED, TelemetryEvent, clear_listeners, register_listener


def _lesson(lesson_id: str, difficulty: str = "easy", minutes: float = 30, subject: str = "Math", **extra) -> Lesson:
    return Lesson(id=lesson_id, subject=subject, title=f"Lesson {lesson_id}", difficulty=difficulty, estimated_minutes=minutes, **extra)


def _schedule(*lesson_groups) -> List[Day]:
    return [
        Day(id=f"d{index + 1}", date=date(2024, 1, index + 1), lessons=list(group))
        for index, group in enumerate(lesson_groups)
    ]


def _ids(day: Day) -> List[str]:
    return [lesson.id for lesson in day.lessons]


def test_no_missed_lessons_returns_identical_proposal() -> None:
    schedule = _schedule([_lesson("a"), _lesson("b", "medium", 45)], [_lesson("c")], [])

    result = auto_reschedule(schedule, [])

    assert result.proposed == result.original
    assert result.original == schedule
    assert result.changes == []


def test_missed_lesson_moves_to_best_remaining_day() -> None:
    schedule = _schedule([_lesson("m", "medium", 45, subject="History"), _lesson("a")], [], [])

    result = auto_reschedule(schedule, ["m"])

    assert _ids(result.proposed[0]) == ["a"]
    assert _ids(result.proposed[1]) == ["m"]
    assert len(result.changes) == 1
    change = result.changes[0]
    assert (change.lesson_id, change.lesson_title, change.from_day, change.to_day, change.reason) == (
        "m",
        "Lesson m",
        "d1",
        "d2",
        MISSED_REASON,
    )
    assert _ids(result.original[0]) == ["m", "a"]


def test_caller_schedule_is_not_mutated() -> None:
    schedule = _schedule([_lesson("m", "medium", 45, subject="History"), _lesson("a")], [])
    snapshot = [day.model_copy(deep=True) for day in schedule]

    auto_reschedule(schedule, ["m"])

    assert schedule == snapshot


def test_lesson_returning_to_same_day_is_not_a_change() -> None:
    schedule = _schedule([_lesson("only")])

    result = auto_reschedule(schedule, ["only"])

    assert _ids(result.proposed[0]) == ["only"]
    assert result.changes == []


def test_unknown_missed_ids_are_ignored() -> None:
    schedule = _schedule([_lesson("a")], [])

    result = auto_reschedule(schedule, ["nope"])

    assert result.proposed == result.original
    assert result.changes == []


def test_unplaceable_lesson_is_reported() -> None:
    schedule = _schedule([_lesson("late", deadline=date(2023, 12, 31))], [])

    result = auto_reschedule(schedule, ["late"])

    assert [lesson.id for lesson in result.unscheduled] == ["late"]
    assert result.changes == []
    assert result.warnings == ["Could not schedule: Lesson late"]
    assert all(day.lessons == [] for day in result.proposed)


def test_prerequisites_left_on_the_schedule_still_count() -> None:
    schedule = _schedule([_lesson("a")], [_lesson("b", "medium", 45, dependencies=["a"])], [])

    result = auto_reschedule(schedule, ["b"])

    assert result.unscheduled == []
    assert result.warnings == []
    assert _ids(result.proposed[0]) == ["a"]
    assert "b" in _ids(result.proposed[1]) + _ids(result.proposed[2])


def test_emits_reschedule_telemetry() -> None:
    events: List[TelemetryEvent] = []
    clear_listeners()
    register_listener(events.append)
    try:
        auto_reschedule(_schedule([_lesson("m", "medium", 45, subject="History"), _lesson("a")], []), ["m"])
    finally:
        clear_listeners()

    names = [event.name for event in events]
    assert RESCHEDULE_PROPOSED in names
    payload = next(event.payload for event in events if event.name == RESCHEDULE_PROPOSED)
    assert payload == {"missed_count": 1, "change_count": 1, "unscheduled_count": 0}
