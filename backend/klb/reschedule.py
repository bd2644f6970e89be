"""Re-place missed lessons against the remaining capacity of a schedule."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from .models import DEFAULT_CONFIG, Day, KLBConfig, Lesson, LessonMove, RescheduleResult
from .scheduler import KnowledgeLoadBalancer
from .telemetry import RESCHEDULE_PROPOSED, emit_event

logger = logging.getLogger(__name__)

MISSED_REASON = "Missed original date"


def _lesson_day_index(days: Sequence[Day]) -> Dict[str, str]:
    return {lesson.id: day.id for day in days for lesson in day.lessons}


def auto_reschedule(
    current_schedule: Sequence[Day],
    missed_lesson_ids: Iterable[str],
    config: KLBConfig = DEFAULT_CONFIG,
) -> RescheduleResult:
    """Pull missed lessons off their days and schedule them again.

    Nothing passed in is mutated; the caller decides whether to accept
    ``proposed``. Lessons that land back on their original day produce no
    change record.
    """
    config.ensure_valid()
    missed_ids = list(dict.fromkeys(missed_lesson_ids))
    original = [day.model_copy(deep=True) for day in current_schedule]
    origin_by_lesson = _lesson_day_index(original)

    stripped: List[Day] = []
    to_reschedule: List[Lesson] = []
    for day in original:
        remaining = list(day.lessons)
        for lesson_id in missed_ids:
            for position, lesson in enumerate(remaining):
                if lesson.id == lesson_id:
                    to_reschedule.append(remaining.pop(position))
                    break
        stripped.append(day.model_copy(update={"lessons": remaining}, deep=True))

    unknown = [lesson_id for lesson_id in missed_ids if lesson_id not in origin_by_lesson]
    if unknown:
        logger.info("Ignoring missed lesson ids not present in the schedule: %s", ", ".join(unknown))

    if not to_reschedule:
        return RescheduleResult(
            original=original,
            proposed=[day.model_copy(deep=True) for day in original],
        )

    result = KnowledgeLoadBalancer(config).schedule(to_reschedule, stripped)
    placed_by_lesson = _lesson_day_index(result.schedule)

    changes: List[LessonMove] = []
    for lesson in to_reschedule:
        from_day = origin_by_lesson.get(lesson.id)
        to_day = placed_by_lesson.get(lesson.id)
        if from_day is None or to_day is None or from_day == to_day:
            continue
        changes.append(
            LessonMove(
                lesson_id=lesson.id,
                lesson_title=lesson.title,
                from_day=from_day,
                to_day=to_day,
                reason=MISSED_REASON,
            )
        )

    emit_event(
        RESCHEDULE_PROPOSED,
        missed_count=len(to_reschedule),
        change_count=len(changes),
        unscheduled_count=len(result.unscheduled),
    )
    return RescheduleResult(
        original=original,
        proposed=result.schedule,
        changes=changes,
        unscheduled=result.unscheduled,
        warnings=result.warnings,
    )


__all__ = ["MISSED_REASON", "auto_reschedule"]
