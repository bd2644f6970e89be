"""In-process telemetry for scheduling runs.

Each scheduler entry point reports one event per call. Payload values are
converted to JSON-compatible data before listeners see them, so a listener
can forward an event without importing scheduler types.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Callable, Dict, Iterator, List

from pydantic_core import to_jsonable_python

logger = logging.getLogger("klb.telemetry")

SCHEDULE_GENERATED = "klb_schedule_generated"
RESCHEDULE_PROPOSED = "klb_reschedule_proposed"
TIME_ESTIMATES_UPDATED = "klb_time_estimates_updated"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TelemetryEvent:
    name: str
    payload: Dict[str, Any]
    emitted_at: datetime = field(default_factory=_utcnow, compare=False)

    def to_json(self) -> str:
        return json.dumps({"event": self.name, **self.payload})


Listener = Callable[[TelemetryEvent], None]

_listeners: List[Listener] = []
_lock = RLock()


def register_listener(listener: Listener) -> None:
    with _lock:
        _listeners.append(listener)


def unregister_listener(listener: Listener) -> None:
    with _lock:
        if listener in _listeners:
            _listeners.remove(listener)


def clear_listeners() -> None:
    with _lock:
        _listeners.clear()


@contextmanager
def captured_events() -> Iterator[List[TelemetryEvent]]:
    """Collect every event emitted inside the block."""
    events: List[TelemetryEvent] = []
    register_listener(events.append)
    try:
        yield events
    finally:
        unregister_listener(events.append)


def emit_event(name: str, **fields: Any) -> TelemetryEvent:
    event = TelemetryEvent(name=name, payload=to_jsonable_python(fields, fallback=str))

    with _lock:
        listeners = list(_listeners)

    for listener in listeners:
        try:
            listener(event)
        except Exception:  # noqa: BLE001
            logger.exception("Telemetry listener %r failed for %s", listener, name)

    logger.info("TELEMETRY %s", event.to_json())
    return event


__all__ = [
    "RESCHEDULE_PROPOSED",
    "SCHEDULE_GENERATED",
    "TIME_ESTIMATES_UPDATED",
    "Listener",
    "TelemetryEvent",
    "captured_events",
    "clear_listeners",
    "emit_event",
    "register_listener",
    "unregister_listener",
]
