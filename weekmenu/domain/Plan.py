"""Weekly plan: seven days, each with a primary and a secondary dinner slot.

At most one slot in the whole week may hold a special dish. The rule is checked
when a dish is assigned and when a planned dish is edited to become special (its
clashing slots are cleared); a plan restored with several special dishes is left as-is
and only new assignments are gated.
"""
import logging
from typing import Dict, List, Optional

from weekmenu.domain.Dish_Catalog import DishCatalog
from weekmenu.events.Event_Bus import DISH_REMOVED, DISH_EXCLUDED, DISH_SPECIAL_SET, PLAN_ASSIGNMENT_REJECTED
from weekmenu.infra.storage import SnapshotStore, save_quietly
from weekmenu.utilities.constants import DAYS_OF_WEEK, PLAN_SLOTS, PLAN_STORAGE_KEY

logger = logging.getLogger(__name__)


def empty_meals() -> Dict[str, Dict[str, Optional[str]]]:
    return {day: {slot: None for slot in PLAN_SLOTS} for day in DAYS_OF_WEEK}


class WeeklyPlan:
    def __init__(self, catalog: DishCatalog, meals: Optional[Dict[str, Dict[str, Optional[str]]]] = None,
                 store: Optional[SnapshotStore] = None):
        self.catalog = catalog
        self.meals = empty_meals()
        for day, slots in (meals or {}).items():
            if day in self.meals and isinstance(slots, dict):
                for slot in PLAN_SLOTS:
                    self.meals[day][slot] = slots.get(slot) or None
        self.store = store
        catalog.event_bus.subscribe(DISH_REMOVED, self._on_dish_gone)
        catalog.event_bus.subscribe(DISH_EXCLUDED, self._on_dish_gone)
        catalog.event_bus.subscribe(DISH_SPECIAL_SET, self._on_dish_special)

    @staticmethod
    def _valid(day: str, slot: str) -> bool:
        return day in DAYS_OF_WEEK and slot in PLAN_SLOTS

    def get(self, day: str, slot: str) -> Optional[str]:
        if not self._valid(day, slot):
            return None
        return self.meals[day][slot]

    def planned_dish_ids(self) -> List[str]:
        return [self.meals[day][slot] for day in DAYS_OF_WEEK for slot in PLAN_SLOTS
                if self.meals[day][slot]]

    def has_special_elsewhere(self, day: str, slot: str) -> bool:
        """True when a slot other than (day, slot) holds a special dish."""
        for other_day in DAYS_OF_WEEK:
            for other_slot in PLAN_SLOTS:
                if (other_day, other_slot) == (day, slot):
                    continue
                dish = self.catalog.get(self.meals[other_day][other_slot])
                if dish is not None and dish.special:
                    return True
        return False

    def options_for(self, day: str, slot: str) -> List[dict]:
        '''Planner choices for a slot; special dishes are disabled once another slot holds one.'''
        blocked = self.has_special_elsewhere(day, slot)
        return [
            {"id": d.id, "name": d.name, "special": d.special, "disabled": d.special and blocked}
            for d in self.catalog.planner_dishes()
        ]

    def assign(self, day: str, slot: str, dish_id: Optional[str]) -> bool:
        """Put a dish in a slot. Returns False when nothing changed.

        An empty dish id clears the slot. Unknown ids, dishes hidden from the planner and
        a second special dish in the same week are rejected and leave the plan untouched.
        """
        if not self._valid(day, slot):
            return False
        if not dish_id:
            return self.clear(day, slot)
        dish = self.catalog.get(dish_id)
        if dish is None or not dish.include_in_planner:
            return False
        if dish.special and self.has_special_elsewhere(day, slot):
            logger.info("Rejected %s for %s/%s: another special dish is already planned", dish.name, day, slot)
            self.catalog.event_bus.publish(PLAN_ASSIGNMENT_REJECTED, {
                "day": day,
                "slot": slot,
                "dish_id": dish.id,
                "reason": "special_conflict",
            })
            return False
        self.meals[day][slot] = dish.id
        self._persist()
        return True

    def clear(self, day: str, slot: str) -> bool:
        if not self._valid(day, slot):
            return False
        self.meals[day][slot] = None
        self._persist()
        return True

    def clear_all_referencing(self, dish_id: str) -> int:
        '''Empties every slot assigned to dish_id; returns how many were cleared.'''
        cleared = 0
        for day in DAYS_OF_WEEK:
            for slot in PLAN_SLOTS:
                if dish_id and self.meals[day][slot] == dish_id:
                    self.meals[day][slot] = None
                    cleared += 1
        if cleared:
            self._persist()
        return cleared

    def reset(self):
        self.meals = empty_meals()
        self._persist()

    def _on_dish_gone(self, event_name: str, payload):
        cleared = self.clear_all_referencing(payload.get("dish_id"))
        if cleared:
            logger.debug("%s: cleared %d slot(s) for %s", event_name, cleared, payload.get("name"))

    def _on_dish_special(self, event_name: str, payload):
        """A planned dish just became special: drop its slots that now clash with another special."""
        dish_id = payload.get("dish_id")
        cleared = 0
        for day in DAYS_OF_WEEK:
            for slot in PLAN_SLOTS:
                if dish_id and self.meals[day][slot] == dish_id and self.has_special_elsewhere(day, slot):
                    self.meals[day][slot] = None
                    cleared += 1
        if cleared:
            logger.info("%s: cleared %d slot(s) of %s to keep one special dish", event_name, cleared, payload.get("name"))
            self._persist()

    def to_dict(self):
        return {day: dict(self.meals[day]) for day in DAYS_OF_WEEK}

    def _persist(self):
        save_quietly(self.store, PLAN_STORAGE_KEY, self.to_dict())

    def __str__(self) -> str:
        rows = []
        for day in DAYS_OF_WEEK:
            names = []
            for slot in PLAN_SLOTS:
                dish = self.catalog.get(self.meals[day][slot])
                names.append(dish.name if dish else "-")
            rows.append(f"{day}: {' / '.join(names)}")
        return "Plan:\n\t" + "\n\t".join(rows)

    __repr__ = __str__
