"""REST endpoints exposing the scheduler entry points."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import Field

from .config import get_settings
from .days import build_day_sequence
from .errors import KLBError
from .load_model import analyze_days
from .models import (
    Day,
    DayLoadSummary,
    KLBConfig,
    KLBModel,
    Lesson,
    RescheduleResult,
    ScheduleResult,
    SessionLog,
    SubjectProfile,
)
from .reschedule import auto_reschedule
from .scheduler import schedule_with_klb
from .time_estimator import update_time_estimates

router = APIRouter(prefix="/api", tags=["scheduling"])
logger = logging.getLogger(__name__)


class ScheduleRequest(KLBModel):
    lessons: List[Lesson] = Field(default_factory=list)
    days: Optional[List[Day]] = None
    start_date: Optional[date] = None
    config: Optional[KLBConfig] = None


class RescheduleRequest(KLBModel):
    days: List[Day] = Field(default_factory=list)
    missed_lesson_ids: List[str] = Field(default_factory=list)
    config: Optional[KLBConfig] = None


class TimeEstimateRequest(KLBModel):
    subjects: List[SubjectProfile] = Field(default_factory=list)
    sessions: List[SessionLog] = Field(default_factory=list)


class LoadRequest(KLBModel):
    days: List[Day] = Field(default_factory=list)
    config: Optional[KLBConfig] = None


def _resolve_config(config: Optional[KLBConfig]) -> KLBConfig:
    if config is not None:
        return config
    return get_settings().to_klb_config()


def _requested_days(request: ScheduleRequest) -> List[Day]:
    if request.days is not None:
        return request.days
    settings = get_settings()
    start = request.start_date or date.today()
    logger.info("No days supplied; planning %s days from %s", settings.default_day_count, start)
    return build_day_sequence(start, settings.default_day_count)


def _unprocessable(exc: KLBError) -> HTTPException:
    logger.warning("Rejected scheduling request: %s", exc)
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.post("/schedule", response_model=ScheduleResult)
def create_schedule(request: ScheduleRequest) -> ScheduleResult:
    try:
        return schedule_with_klb(request.lessons, _requested_days(request), _resolve_config(request.config))
    except KLBError as exc:
        raise _unprocessable(exc) from exc


@router.post("/reschedule", response_model=RescheduleResult)
def propose_reschedule(request: RescheduleRequest) -> RescheduleResult:
    try:
        return auto_reschedule(request.days, request.missed_lesson_ids, _resolve_config(request.config))
    except KLBError as exc:
        raise _unprocessable(exc) from exc


@router.post("/time-estimates", response_model=List[SubjectProfile])
def refresh_time_estimates(request: TimeEstimateRequest) -> List[SubjectProfile]:
    return update_time_estimates(request.subjects, request.sessions)


@router.post("/load", response_model=List[DayLoadSummary])
def day_loads(request: LoadRequest) -> List[DayLoadSummary]:
    try:
        config = _resolve_config(request.config)
    except KLBError as exc:
        raise _unprocessable(exc) from exc
    return analyze_days(request.days, config)


__all__ = ["router"]
