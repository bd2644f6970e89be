from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import List

from klb.models import Lesson
from klb.telemetry import (
    TelemetryEvent,
    captured_events,
    clear_listeners,
    emit_event,
    register_listener,
    unregister_listener,
)


def test_emit_event_serialises_dates_for_listeners() -> None:
    events: List[TelemetryEvent] = []
    clear_listeners()
    register_listener(events.append)
    try:
        emit_event("klb_test_event", day=date(2024, 1, 2), count=3)
    finally:
        clear_listeners()

    assert events == [TelemetryEvent(name="klb_test_event", payload={"day": "2024-01-02", "count": 3})]
    assert events[0].emitted_at.tzinfo == timezone.utc


def test_payload_models_become_plain_data() -> None:
    lesson = Lesson(id="a", subject="Math", title="Algebra", deadline=date(2024, 1, 5))

    with captured_events() as events:
        emitted = emit_event("klb_test_event", lesson=lesson, ids=("a", "b"), at=datetime(2024, 1, 1, 9, 30))

    assert events == [emitted]
    payload = emitted.payload
    assert payload["lesson"]["deadline"] == "2024-01-05"
    assert payload["lesson"]["id"] == "a"
    assert payload["ids"] == ["a", "b"]
    assert payload["at"] == "2024-01-01T09:30:00"


def test_captured_events_only_sees_its_own_block() -> None:
    emit_event("klb_before")
    with captured_events() as events:
        emit_event("klb_inside")
    emit_event("klb_after")

    assert [event.name for event in events] == ["klb_inside"]


def test_unregister_listener_stops_delivery() -> None:
    events: List[TelemetryEvent] = []
    register_listener(events.append)
    emit_event("klb_first")
    unregister_listener(events.append)
    unregister_listener(events.append)
    emit_event("klb_second")

    assert [event.name for event in events] == ["klb_first"]


def test_failing_listener_does_not_block_others(caplog) -> None:
    def broken(event: TelemetryEvent) -> None:
        raise RuntimeError("listener exploded")

    register_listener(broken)
    try:
        with captured_events() as events, caplog.at_level(logging.INFO, logger="klb.telemetry"):
            emit_event("klb_test_event", ok=True)
    finally:
        unregister_listener(broken)

    assert len(events) == 1
    assert "failed for klb_test_event" in caplog.text
    assert 'TELEMETRY {"event": "klb_test_event", "ok": true}' in caplog.text
