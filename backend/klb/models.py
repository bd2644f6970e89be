"""Scheduling data types shared by every part of the load balancer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .errors import ConfigurationError

Difficulty = Literal["easy", "medium", "hard"]
LoadLevel = Literal["light", "moderate", "heavy", "overloaded"]

DIFFICULTIES: tuple[Difficulty, ...] = ("easy", "medium", "hard")


class KLBModel(BaseModel):
    """Accepts both snake_case names and the camelCase payload keys used by clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Lesson(KLBModel):
    """Single study unit. Only ``completed`` influences whether it gets scheduled."""

    id: str
    subject: str
    title: str
    difficulty: Difficulty = "medium"
    estimated_minutes: float = Field(default=30, ge=0)
    deadline: Optional[date] = None
    dependencies: List[str] = Field(default_factory=list)
    completed: bool = False
    tags: List[str] = Field(default_factory=list)


class Day(KLBModel):
    """Calendar slot. Optional limits tighten the config limits for this day only."""

    id: str
    date: date
    lessons: List[Lesson] = Field(default_factory=list)
    max_capacity: Optional[int] = Field(default=None, ge=1)
    cognitive_load_limit: Optional[float] = Field(default=None, gt=0)


class SubjectProfile(KLBModel):
    name: str
    color: str = ""
    total_lessons: int = Field(default=0, ge=0)
    completed_lessons: int = Field(default=0, ge=0)
    difficulty: Difficulty = "medium"
    avg_completion_time: float = Field(default=30, ge=0)
    performance_score: float = Field(default=0, ge=0, le=100)


class SessionLog(KLBModel):
    lesson_id: str
    subject: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: float = Field(ge=0)
    completed: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Timestamps without an offset are read as UTC so sessions stay comparable.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class DifficultyWeights(KLBModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    easy: float = 2
    medium: float = 4
    hard: float = 6

    def weight_for(self, difficulty: Difficulty) -> float:
        return float(getattr(self, difficulty))


class KLBConfig(KLBModel):
    """Immutable per-call scheduling configuration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    max_lessons_per_day: int = 3
    max_cognitive_load: float = 10
    difficulty_weights: DifficultyWeights = Field(default_factory=DifficultyWeights)
    prefer_heavy_light_alternation: bool = True
    respect_deadlines: bool = True
    enforce_dependencies: bool = Field(
        default=True,
        validation_alias=AliasChoices("enforce_dependencies", "enforceDependencies", "enforeDependencies"),
        serialization_alias="enforceDependencies",
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ConfigurationError(_describe_config_errors(exc)) from exc

    @model_validator(mode="after")
    def _check_limits(self) -> "KLBConfig":
        return self.ensure_valid()

    def ensure_valid(self) -> "KLBConfig":
        """Reject limits that would make every placement decision meaningless.

        Construction already runs this check; it is repeated at the scheduler
        entry points for configs built with ``model_construct``.
        """
        if self.max_lessons_per_day < 1:
            raise ConfigurationError(
                f"max_lessons_per_day must be at least 1 (got {self.max_lessons_per_day})."
            )
        if self.max_cognitive_load <= 0:
            raise ConfigurationError(
                f"max_cognitive_load must be positive (got {self.max_cognitive_load})."
            )
        for difficulty in DIFFICULTIES:
            weight = self.difficulty_weights.weight_for(difficulty)
            if weight <= 0:
                raise ConfigurationError(f"Difficulty weight for {difficulty!r} must be positive (got {weight}).")
        return self


def _describe_config_errors(exc: ValidationError) -> str:
    messages: List[str] = []
    for error in exc.errors():
        original = error.get("ctx", {}).get("error")
        if isinstance(original, ConfigurationError):
            messages.append(str(original))
        else:
            location = ".".join(str(part) for part in error["loc"]) or "config"
            messages.append(f"{location}: {error['msg']}")
    return "; ".join(messages)


DEFAULT_CONFIG = KLBConfig()


@dataclass(frozen=True)
class FeasibilityResult:
    can_schedule: bool
    reason: Optional[str] = None


class ScheduleMetrics(KLBModel):
    total_lessons: int = 0
    scheduled_lessons: int = 0
    avg_load_per_day: float = 0.0
    peak_load: float = 0.0
    days_used: int = 0


class ScheduleResult(KLBModel):
    success: bool
    schedule: List[Day] = Field(default_factory=list)
    unscheduled: List[Lesson] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    metrics: ScheduleMetrics = Field(default_factory=ScheduleMetrics)


class LessonMove(KLBModel):
    lesson_id: str
    lesson_title: str
    from_day: str
    to_day: str
    reason: str


class RescheduleResult(KLBModel):
    """Proposal only; the caller decides whether ``proposed`` replaces ``original``."""

    original: List[Day] = Field(default_factory=list)
    proposed: List[Day] = Field(default_factory=list)
    changes: List[LessonMove] = Field(default_factory=list)
    unscheduled: List[Lesson] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class DayLoadSummary(KLBModel):
    """Load-meter view of a single day."""

    day_id: str
    load: float
    load_limit: float
    load_level: LoadLevel
    lesson_count: int
    difficulty_breakdown: Dict[str, int] = Field(default_factory=dict)
    recommended_order: List[str] = Field(default_factory=list)


__all__ = [
    "DEFAULT_CONFIG",
    "DIFFICULTIES",
    "Day",
    "DayLoadSummary",
    "Difficulty",
    "DifficultyWeights",
    "FeasibilityResult",
    "KLBConfig",
    "KLBModel",
    "Lesson",
    "LessonMove",
    "LoadLevel",
    "RescheduleResult",
    "ScheduleMetrics",
    "ScheduleResult",
    "SessionLog",
    "SubjectProfile",
]
