"""Reference scenarios used to sanity-check a deployment of the scheduler."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Sequence, Tuple

from .models import DEFAULT_CONFIG, Day, KLBConfig, Lesson, ScheduleResult
from .reschedule import auto_reschedule
from .scheduler import schedule_with_klb

# A hard hour-long lesson weighs 12 points, so scenarios with hard lessons need headroom above 12.
ROOMY_CONFIG = KLBConfig(max_cognitive_load=14)


@dataclass(frozen=True)
class VectorOutcome:
    name: str
    passed: bool
    details: str


def _days(count: int) -> List[Day]:
    return [Day(id=f"d{index + 1}", date=date(2024, 1, index + 1)) for index in range(count)]


def _day_index(result: ScheduleResult, lesson_id: str) -> int:
    for index, day in enumerate(result.schedule):
        if any(lesson.id == lesson_id for lesson in day.lessons):
            return index
    return -1


def basic_distribution() -> Tuple[List[Lesson], List[Day], KLBConfig]:
    lessons = [
        Lesson(id="1", subject="Math", title="Algebra Basics", difficulty="easy", estimated_minutes=30),
        Lesson(id="2", subject="Math", title="Equations", difficulty="easy", estimated_minutes=30),
        Lesson(id="3", subject="Math", title="Functions", difficulty="easy", estimated_minutes=30),
    ]
    return lessons, _days(3), DEFAULT_CONFIG


def load_balancing() -> Tuple[List[Lesson], List[Day], KLBConfig]:
    lessons = [
        Lesson(id="1", subject="Physics", title="Quantum Mechanics", difficulty="hard", estimated_minutes=60),
        Lesson(id="2", subject="Physics", title="Relativity", difficulty="hard", estimated_minutes=60),
        Lesson(id="3", subject="English", title="Grammar", difficulty="easy", estimated_minutes=30),
        Lesson(id="4", subject="English", title="Vocabulary", difficulty="easy", estimated_minutes=30),
    ]
    return lessons, _days(2), ROOMY_CONFIG


def deadline_priority() -> Tuple[List[Lesson], List[Day], KLBConfig]:
    lessons = [
        Lesson(id="1", subject="History", title="Chapter 1", difficulty="medium", estimated_minutes=45),
        Lesson(
            id="2",
            subject="History",
            title="Chapter 2",
            difficulty="medium",
            estimated_minutes=45,
            deadline=date(2024, 1, 2),
        ),
    ]
    return lessons, _days(2), DEFAULT_CONFIG


def dependency_chain() -> Tuple[List[Lesson], List[Day], KLBConfig]:
    lessons = [
        Lesson(id="1", subject="Programming", title="Variables", difficulty="easy", estimated_minutes=30),
        Lesson(
            id="2",
            subject="Programming",
            title="Functions",
            difficulty="medium",
            estimated_minutes=45,
            dependencies=["1"],
        ),
        Lesson(
            id="3",
            subject="Programming",
            title="Classes",
            difficulty="hard",
            estimated_minutes=60,
            dependencies=["2"],
        ),
    ]
    return lessons, _days(3), ROOMY_CONFIG


def overflow() -> Tuple[List[Lesson], List[Day], KLBConfig]:
    lessons = [
        Lesson(id=str(index + 1), subject="Science", title=f"Lesson {index + 1}", difficulty="hard", estimated_minutes=60)
        for index in range(10)
    ]
    days = [day.model_copy(update={"max_capacity": 2}) for day in _days(2)]
    return lessons, days, ROOMY_CONFIG


def _check_basic() -> VectorOutcome:
    result = schedule_with_klb(*basic_distribution())
    passed = result.success and not result.unscheduled and result.metrics.avg_load_per_day == 2
    return VectorOutcome(
        "Basic distribution",
        passed,
        f"Success: {result.success}, Unscheduled: {len(result.unscheduled)}, Avg load: {result.metrics.avg_load_per_day}",
    )


def _check_balancing() -> VectorOutcome:
    result = schedule_with_klb(*load_balancing())
    spread = all(sum(1 for lesson in day.lessons if lesson.difficulty == "hard") <= 1 for day in result.schedule)
    passed = result.success and spread and result.metrics.peak_load == 14
    return VectorOutcome(
        "Load balancing",
        passed,
        f"Hard lessons distributed: {spread}, Peak load: {result.metrics.peak_load}",
    )


def _check_deadline() -> VectorOutcome:
    result = schedule_with_klb(*deadline_priority())
    first_day = any(lesson.id == "2" for lesson in result.schedule[0].lessons)
    return VectorOutcome("Deadline priority", result.success and first_day, f"Deadline item scheduled first: {first_day}")


def _check_dependencies() -> VectorOutcome:
    result = schedule_with_klb(*dependency_chain())
    indices = [_day_index(result, lesson_id) for lesson_id in ("1", "2", "3")]
    ordered = indices[0] >= 0 and indices[0] <= indices[1] <= indices[2]
    return VectorOutcome("Dependency chain", result.success and ordered, f"Day indices: {indices}")


def _check_overflow() -> VectorOutcome:
    result = schedule_with_klb(*overflow())
    passed = not result.success and len(result.unscheduled) == 8
    return VectorOutcome("Overflow", passed, f"Unscheduled: {len(result.unscheduled)}")


def _check_reschedule_idempotence() -> VectorOutcome:
    scheduled = schedule_with_klb(*basic_distribution())
    proposal = auto_reschedule(scheduled.schedule, [])
    passed = proposal.proposed == proposal.original and not proposal.changes
    return VectorOutcome("Reschedule idempotence", passed, f"Changes: {len(proposal.changes)}")


REFERENCE_CHECKS: Sequence[Callable[[], VectorOutcome]] = (
    _check_basic,
    _check_balancing,
    _check_deadline,
    _check_dependencies,
    _check_overflow,
    _check_reschedule_idempotence,
)


def run_reference_vectors() -> List[VectorOutcome]:
    return [check() for check in REFERENCE_CHECKS]


__all__ = [
    "REFERENCE_CHECKS",
    "ROOMY_CONFIG",
    "VectorOutcome",
    "basic_distribution",
    "deadline_priority",
    "dependency_chain",
    "load_balancing",
    "overflow",
    "run_reference_vectors",
]
