"""Toast notification buffer for the web layer.

Subscribes to ui.notification on an EventBus and keeps a ring buffer of
recent notifications that the FastAPI layer exposes for polling.

Design:
  * Each notification gets an auto-increment integer id (cursor) so clients
    request only newer ones (since=<last_id_seen>).
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone
import logging

from .Event_Bus import EventBus, UI_NOTIFICATION

logger = logging.getLogger(__name__)

MAX_EVENTS = 300


class NotificationBuffer:
    def __init__(self, max_events: int = MAX_EVENTS):
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self._max_events = max_events
        self._bus: Optional[EventBus] = None

    def _record(self, event_name: str, payload: Any):  # signature expected by EventBus
        if not isinstance(payload, dict):
            return
        with self._lock:
            self._events.append({
                'id': self._next_id,
                'type': event_name,
                'message': payload.get('message', ''),
                'kind': payload.get('kind', 'success'),
                'ts': datetime.now(timezone.utc).isoformat(),
            })
            self._next_id += 1
            if len(self._events) > self._max_events:
                del self._events[: len(self._events) - self._max_events]

    def attach(self, bus: EventBus) -> "NotificationBuffer":
        """Idempotent: subscribe once to the given bus."""
        if self._bus is bus:
            return self
        if self._bus is not None:
            self._bus.unsubscribe(UI_NOTIFICATION, self._record)
        bus.subscribe(UI_NOTIFICATION, self._record)
        self._bus = bus
        logger.debug("Notification buffer attached")
        return self

    def get_events(self, since: int | None = None) -> Dict[str, Any]:
        """Return notifications newer than 'since' (exclusive), plus next_cursor for polling."""
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['NotificationBuffer', 'MAX_EVENTS']
