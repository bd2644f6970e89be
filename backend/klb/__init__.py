"""Knowledge Load Balancer: places study lessons onto calendar days."""

from .errors import ConfigurationError, DependencyCycleError, KLBError
from .load_model import analyze_day, calculate_day_load, calculate_lesson_load
from .models import (
    DEFAULT_CONFIG,
    Day,
    DayLoadSummary,
    DifficultyWeights,
    KLBConfig,
    Lesson,
    LessonMove,
    RescheduleResult,
    ScheduleMetrics,
    ScheduleResult,
    SessionLog,
    SubjectProfile,
)
from .reschedule import auto_reschedule
from .scheduler import KnowledgeLoadBalancer, schedule_with_klb
from .time_estimator import update_time_estimates

__all__ = [
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "Day",
    "DayLoadSummary",
    "DependencyCycleError",
    "DifficultyWeights",
    "KLBConfig",
    "KLBError",
    "KnowledgeLoadBalancer",
    "Lesson",
    "LessonMove",
    "RescheduleResult",
    "ScheduleMetrics",
    "ScheduleResult",
    "SessionLog",
    "SubjectProfile",
    "analyze_day",
    "auto_reschedule",
    "calculate_day_load",
    "calculate_lesson_load",
    "schedule_with_klb",
    "update_time_estimates",
]
