"""Simple Event Bus / Observer implementation for EcoEats notifications.

Event names used:
  ui.notification -> payload {"message": str, "kind": "success"|"warning"|"error"}
  points.awarded -> payload {"user_id": str, "points": int, "total": int, "level": str}
  pantry.image_resolved -> payload {"user_id": str, "item_id": str, "image_url": str}
  pantry.expiry_digest -> payload {"user_id": str, "expired": [...], "expiring_soon": [...]}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
UI_NOTIFICATION = "ui.notification"
POINTS_AWARDED = "points.awarded"
PANTRY_IMAGE_RESOLVED = "pantry.image_resolved"
PANTRY_EXPIRY_DIGEST = "pantry.expiry_digest"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %s", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'UI_NOTIFICATION', 'POINTS_AWARDED', 'PANTRY_IMAGE_RESOLVED', 'PANTRY_EXPIRY_DIGEST'
]
