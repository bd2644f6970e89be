"""Greedy Knowledge Load Balancer placement loop."""

from __future__ import annotations

import logging
import time
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .balancer import balance_loads
from .feasibility import can_schedule_lesson
from .load_model import calculate_day_load, round_tenth
from .models import DEFAULT_CONFIG, Day, KLBConfig, Lesson, ScheduleMetrics, ScheduleResult
from .ordering import missing_prerequisites, placement_order
from .scoring import DayScorer
from .telemetry import SCHEDULE_GENERATED, emit_event

logger = logging.getLogger(__name__)


class KnowledgeLoadBalancer:
    """Assigns pending lessons to days under capacity, load, deadline and prerequisite limits.

    Each lesson, taken in placement order, goes to the feasible day with the
    highest score; ties keep the earliest day. Lessons with no feasible day
    are reported as unscheduled rather than raised. The instance holds no
    state between calls.
    """

    def __init__(self, config: KLBConfig = DEFAULT_CONFIG, *, scorer: Optional[DayScorer] = None) -> None:
        self._config = config
        self._scorer = scorer or DayScorer(config)

    @property
    def config(self) -> KLBConfig:
        return self._config

    def schedule(self, lessons: Iterable[Lesson], days: Sequence[Day]) -> ScheduleResult:
        config = self._config.ensure_valid()
        started = time.perf_counter()
        lessons = list(lessons)
        pending = [lesson for lesson in lessons if not lesson.completed]

        working = [day.model_copy(deep=True) for day in days]
        admitted, unscheduled, warnings = self._admit(pending, working)
        ordered = placement_order(admitted)
        scheduled_dates = self._seed_scheduled_dates(lessons, working)
        warnings.extend(self._missing_prerequisite_warnings(admitted, lessons, working))

        for lesson in ordered:
            best_index = self._best_day_index(lesson, working, scheduled_dates)
            if best_index is None:
                logger.warning("Could not schedule lesson %s (%s)", lesson.id, lesson.title)
                unscheduled.append(lesson)
                warnings.append(f"Could not schedule: {lesson.title}")
                continue
            target = working[best_index]
            target.lessons.append(lesson)
            scheduled_dates[lesson.id] = target.date
            logger.debug("Placed lesson %s on %s", lesson.id, target.id)

        working = balance_loads(working, config)
        metrics = self._metrics(pending, working)
        result = ScheduleResult(
            success=not unscheduled,
            schedule=working,
            unscheduled=unscheduled,
            warnings=warnings,
            metrics=metrics,
        )
        emit_event(
            SCHEDULE_GENERATED,
            total_lessons=metrics.total_lessons,
            scheduled_lessons=metrics.scheduled_lessons,
            unscheduled_lessons=len(unscheduled),
            days_used=metrics.days_used,
            peak_load=metrics.peak_load,
            warning_count=len(warnings),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result

    def _best_day_index(
        self,
        lesson: Lesson,
        days: Sequence[Day],
        scheduled_dates: Dict[str, date],
    ) -> Optional[int]:
        best_index: Optional[int] = None
        best_score = -1.0
        for index, day in enumerate(days):
            feasibility = can_schedule_lesson(day, lesson, scheduled_dates, self._config)
            if not feasibility.can_schedule:
                continue
            previous_load = calculate_day_load(days[index - 1].lessons, self._config) if index > 0 else 0.0
            score = self._scorer.score(day, lesson, previous_load)
            if score > best_score:
                best_score = score
                best_index = index
        return best_index

    def _admit(self, pending: Sequence[Lesson], days: Sequence[Day]) -> Tuple[List[Lesson], List[Lesson], List[str]]:
        """Split pending lessons into those to place and those rejected up front.

        A lesson already sitting on one of the days stays where it is. A
        repeated id keeps its first occurrence; later ones are reported as
        unscheduled.
        """
        placed_ids = {lesson.id for day in days for lesson in day.lessons}
        seen: Set[str] = set()
        admitted: List[Lesson] = []
        rejected: List[Lesson] = []
        warnings: List[str] = []
        for lesson in pending:
            if lesson.id in placed_ids:
                logger.debug("Lesson %s is already on the schedule", lesson.id)
                continue
            if lesson.id in seen:
                logger.warning("Duplicate lesson id %s (%s)", lesson.id, lesson.title)
                rejected.append(lesson)
                warnings.append(f"Duplicate lesson id {lesson.id}: {lesson.title}")
                continue
            seen.add(lesson.id)
            admitted.append(lesson)
        return admitted, rejected, warnings

    def _seed_scheduled_dates(self, lessons: Sequence[Lesson], days: Sequence[Day]) -> Dict[str, date]:
        # Completed lessons satisfy any prerequisite; lessons already on a day keep that day's date.
        scheduled: Dict[str, date] = {lesson.id: date.min for lesson in lessons if lesson.completed}
        for day in days:
            for lesson in day.lessons:
                scheduled[lesson.id] = date.min if lesson.completed else day.date
        return scheduled

    def _missing_prerequisite_warnings(
        self,
        pending: Sequence[Lesson],
        lessons: Sequence[Lesson],
        days: Sequence[Day],
    ) -> List[str]:
        if not self._config.enforce_dependencies:
            return []
        known_ids = {lesson.id for lesson in lessons}
        known_ids.update(lesson.id for day in days for lesson in day.lessons)
        warnings: List[str] = []
        for lesson, dependency_id in missing_prerequisites(pending, known_ids):
            logger.warning("Lesson %s references missing prerequisite %s", lesson.id, dependency_id)
            warnings.append(f"Missing prerequisite {dependency_id} for: {lesson.title}")
        return warnings

    def _metrics(self, pending: Sequence[Lesson], days: Sequence[Day]) -> ScheduleMetrics:
        loads = [calculate_day_load(day.lessons, self._config) for day in days]
        return ScheduleMetrics(
            total_lessons=len(pending),
            scheduled_lessons=sum(len(day.lessons) for day in days),
            avg_load_per_day=round_tenth(sum(loads) / len(loads)) if loads else 0.0,
            peak_load=max(loads, default=0.0),
            days_used=sum(1 for day in days if day.lessons),
        )


def schedule_with_klb(
    lessons: Iterable[Lesson],
    days: Sequence[Day],
    config: KLBConfig = DEFAULT_CONFIG,
) -> ScheduleResult:
    """Place ``lessons`` onto copies of ``days``; neither input is modified."""
    return KnowledgeLoadBalancer(config).schedule(lessons, days)


__all__ = ["KnowledgeLoadBalancer", "schedule_with_klb"]
