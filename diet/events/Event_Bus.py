"""Simple Event Bus / Observer implementation for goal activity.

Event names:
  goal.created    -> payload {"user_id", "goal_id", "goal_type"}
  goal.deleted    -> payload {"user_id", "goal_id"}
  plan.created    -> payload {"user_id", "goal_id", "plan_id", "daily_calories", "source"}
  weight.recorded -> payload {"user_id", "goal_id", "weight", "progress_percent"}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from threading import RLock
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]

# --- Event name constants (used across modules) ---
GOAL_CREATED = "goal.created"
GOAL_DELETED = "goal.deleted"
PLAN_CREATED = "plan.created"
WEIGHT_RECORDED = "weight.recorded"

ALL_EVENTS = (GOAL_CREATED, GOAL_DELETED, PLAN_CREATED, WEIGHT_RECORDED)


class EventBus:
	"""Routes events to callbacks registered per event name."""

	def __init__(self):
		self._lock = RLock()
		self._listeners: Dict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Listener) -> None:
		with self._lock:
			listeners = self._listeners[event_name]
			if callback not in listeners:
				listeners.append(callback)

	def unsubscribe(self, event_name: str, callback: Listener) -> bool:
		with self._lock:
			listeners = self._listeners.get(event_name, [])
			if callback in listeners:
				listeners.remove(callback)
				return True
		return False

	def listeners(self, event_name: str) -> List[Listener]:
		with self._lock:
			return list(self._listeners.get(event_name, ()))

	def publish(self, event_name: str, payload: Any) -> int:
		"""Deliver to every listener; returns how many accepted the event."""
		delivered = 0
		for callback in self.listeners(event_name):
			try:
				callback(event_name, payload)
			except Exception:  # a failing listener must not break the request
				logger.exception("Listener %r failed on %s", callback, event_name)
			else:
				delivered += 1
		return delivered

	def reset(self) -> None:
		with self._lock:
			self._listeners.clear()


# Process-wide bus shared by routes and observers
GLOBAL_EVENT_BUS = EventBus()


def create_event(event_name: str, payload: Any = None) -> int:
	"""Publish on the global bus."""
	return GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'Listener', 'GLOBAL_EVENT_BUS', 'create_event', 'ALL_EVENTS',
	'GOAL_CREATED', 'GOAL_DELETED', 'PLAN_CREATED', 'WEIGHT_RECORDED'
]
