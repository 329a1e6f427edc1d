"""Web-facing observers for goal activity events.

Subscribes to every event on the GLOBAL_EVENT_BUS and keeps a bounded
in-memory buffer of recent events that the web layer can poll per user.

  * Each event gets an auto-increment integer id (cursor) so clients can ask
    only for newer events (since=<last_id_seen>).
  * A Lock guards the buffer; state is per process.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import GLOBAL_EVENT_BUS, ALL_EVENTS

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    if not isinstance(payload, dict) or not payload.get('user_id'):
        logger.debug("Ignoring %s event without user_id", event_name)
        return
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
            **payload,
        }
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in ALL_EVENTS:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(user_id: str, since: Optional[int] = None) -> Dict[str, Any]:
    """Return the user's events newer than 'since' (exclusive).

    next_cursor is the largest id seen in the buffer so the client can poll with since=next_cursor.
    """
    with _lock:
        own = [e for e in _events if e.get('user_id') == user_id]
        data = own if since is None else [e for e in own if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


def clear():
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'clear']
