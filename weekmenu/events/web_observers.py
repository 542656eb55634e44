"""Web-facing observers for planner events.

Subscribes to an EventBus for:
  - dish.removed
  - dish.excluded
  - plan.assignment_rejected

and keeps a small in-memory ring buffer of recent events that the API exposes
so a client can poll for "why did my pick not stick" style notices.

Each event carries an auto-increment integer id (cursor); clients pass
since=<last_id_seen> to get only newer ones. MAX_EVENTS caps memory.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS, DISH_REMOVED, DISH_EXCLUDED, PLAN_ASSIGNMENT_REJECTED
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started_on: List[EventBus] = []


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            for k in ('dish_id', 'name', 'day', 'slot', 'reason'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start(bus: Optional[EventBus] = None):
    """Idempotent start: subscribe observers once per bus."""
    bus = bus or GLOBAL_EVENT_BUS
    if any(b is bus for b in _started_on):
        return
    for name in (DISH_REMOVED, DISH_EXCLUDED, PLAN_ASSIGNMENT_REJECTED):
        bus.subscribe(name, _record)
    _started_on.append(bus)


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the last N (up to MAX_EVENTS) events.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
