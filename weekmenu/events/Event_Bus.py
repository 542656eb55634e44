"""Simple Event Bus / Observer implementation for planner signals.

Event names used so far:
  dish.removed -> payload {"dish_id": str, "name": str}
  dish.excluded -> payload {"dish_id": str, "name": str}
  dish.special_set -> payload {"dish_id": str, "name": str}
  plan.assignment_rejected -> payload {"day": str, "slot": str, "dish_id": str, "reason": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
DISH_REMOVED = "dish.removed"
DISH_EXCLUDED = "dish.excluded"
DISH_SPECIAL_SET = "dish.special_set"
PLAN_ASSIGNMENT_REJECTED = "plan.assignment_rejected"


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
			except Exception as e:
				logger.error("Error delivering %s to %s: %s", event_name, cb, e)


# Shared instance used by the web app
GLOBAL_EVENT_BUS = EventBus()

__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'DISH_REMOVED', 'DISH_EXCLUDED', 'DISH_SPECIAL_SET', 'PLAN_ASSIGNMENT_REJECTED'
]
