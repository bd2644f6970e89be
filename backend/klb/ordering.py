"""Placement order: urgency and difficulty first, then prerequisite-safe."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, Iterator, List, Sequence, Set, Tuple

from .errors import DependencyCycleError
from .models import Lesson

logger = logging.getLogger(__name__)

DIFFICULTY_RANK = {"hard": 0, "medium": 1, "easy": 2}

_IN_PROGRESS = 1
_DONE = 2


def _priority_key(lesson: Lesson) -> Tuple[bool, date, int]:
    return (
        lesson.deadline is None,
        lesson.deadline or date.max,
        DIFFICULTY_RANK[lesson.difficulty],
    )


def prioritize_lessons(lessons: Iterable[Lesson]) -> List[Lesson]:
    """Earlier deadlines first, deadline-bearing before open-ended, then hardest first.

    The sort is stable, so lessons that compare equal keep their input order.
    """
    return sorted(lessons, key=_priority_key)


def resolve_dependencies(lessons: Sequence[Lesson]) -> List[Lesson]:
    """Depth-first topological order that keeps ``lessons`` order wherever possible.

    Prerequisites missing from ``lessons`` are skipped here; callers decide how
    to report them. Raises ``DependencyCycleError`` on the first back edge.
    """
    by_id: Dict[str, Lesson] = {lesson.id: lesson for lesson in lessons}
    state: Dict[str, int] = {}
    ordered: List[Lesson] = []

    for root in lessons:
        if state.get(root.id) is not None:
            continue
        state[root.id] = _IN_PROGRESS
        stack: List[Tuple[Lesson, Iterator[str]]] = [(root, iter(root.dependencies))]
        while stack:
            lesson, pending = stack[-1]
            descended = False
            for dependency_id in pending:
                dependency = by_id.get(dependency_id)
                if dependency is None:
                    continue
                marker = state.get(dependency_id)
                if marker == _DONE:
                    continue
                if marker == _IN_PROGRESS:
                    path = [entry.id for entry, _ in stack]
                    cycle = path[path.index(dependency_id):] + [dependency_id]
                    logger.warning("Dependency cycle detected: %s", " -> ".join(cycle))
                    raise DependencyCycleError(cycle)
                state[dependency_id] = _IN_PROGRESS
                stack.append((dependency, iter(dependency.dependencies)))
                descended = True
                break
            if descended:
                continue
            stack.pop()
            state[lesson.id] = _DONE
            ordered.append(lesson)

    return ordered


def placement_order(lessons: Iterable[Lesson]) -> List[Lesson]:
    return resolve_dependencies(prioritize_lessons(lessons))


def missing_prerequisites(lessons: Iterable[Lesson], known_ids: Set[str]) -> List[Tuple[Lesson, str]]:
    """Pairs of (lesson, prerequisite id) where the prerequisite is unknown."""
    missing: List[Tuple[Lesson, str]] = []
    for lesson in lessons:
        for dependency_id in lesson.dependencies:
            if dependency_id not in known_ids:
                missing.append((lesson, dependency_id))
    return missing


__all__ = [
    "DIFFICULTY_RANK",
    "missing_prerequisites",
    "placement_order",
    "prioritize_lessons",
    "resolve_dependencies",
]
