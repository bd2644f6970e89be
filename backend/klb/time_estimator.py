"""Adaptive per-subject duration estimates from completed sessions."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

from .models import SessionLog, SubjectProfile
from .telemetry import TIME_ESTIMATES_UPDATED, emit_event

logger = logging.getLogger(__name__)

EMA_ALPHA = 0.3


def exponential_moving_average(values: Sequence[float], alpha: float = EMA_ALPHA) -> float:
    if not values:
        raise ValueError("Cannot average an empty sequence of durations.")
    if not 0 < alpha <= 1:
        raise ValueError(f"alpha must be in (0, 1] (got {alpha}).")
    average = float(values[0])
    for value in values[1:]:
        average = alpha * value + (1 - alpha) * average
    return average


def update_time_estimates(
    subjects: Iterable[SubjectProfile],
    sessions: Iterable[SessionLog],
    alpha: float = EMA_ALPHA,
) -> List[SubjectProfile]:
    """Return new profiles whose ``avg_completion_time`` tracks recent completed sessions.

    Sessions are grouped per subject in start-time order, so later sessions
    weigh more. Subjects without completed sessions come back unchanged.
    """
    durations: Dict[str, List[float]] = defaultdict(list)
    for session in sorted(sessions, key=lambda entry: entry.start_time):
        if session.completed:
            durations[session.subject].append(session.duration_minutes)

    updated: List[SubjectProfile] = []
    changed = 0
    for subject in subjects:
        history = durations.get(subject.name)
        if not history:
            updated.append(subject.model_copy(deep=True))
            continue
        estimate = math.floor(exponential_moving_average(history, alpha) + 0.5)
        logger.debug(
            "Subject %s estimate %.1f -> %d minutes from %d sessions",
            subject.name,
            subject.avg_completion_time,
            estimate,
            len(history),
        )
        updated.append(subject.model_copy(update={"avg_completion_time": estimate}, deep=True))
        changed += 1

    emit_event(TIME_ESTIMATES_UPDATED, subjects_updated=changed, subject_count=len(updated))
    return updated


__all__ = ["EMA_ALPHA", "exponential_moving_average", "update_time_estimates"]
