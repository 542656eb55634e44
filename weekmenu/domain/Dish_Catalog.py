"""Dish catalog aggregate: user dishes plus default (seed) dishes."""
import logging
from typing import Dict, Iterable, List, Optional

from weekmenu.domain.Dish import Dish, clean_ingredients, new_dish_id
from weekmenu.events.Event_Bus import EventBus, DISH_REMOVED, DISH_EXCLUDED, DISH_SPECIAL_SET
from weekmenu.infra.storage import SnapshotStore, save_quietly
from weekmenu.utilities.constants import DISHES_STORAGE_KEY

logger = logging.getLogger(__name__)


def _coerce(entry) -> Optional[Dish]:
    if isinstance(entry, Dish):
        return entry.copy() if entry.name.strip() else None
    return Dish.from_dict(entry)


def merge_with_seed(stored_dishes: Iterable, seed_dishes: Iterable) -> List[Dish]:
    """Overlay stored dishes on top of the seed list, keyed by id.

    Seed dishes come first and are always default. A stored entry sharing a seed id
    replaces that seed's content but keeps it default; stored entries with unknown ids
    are appended as user dishes. Malformed entries are normalized and dropped when
    their name is empty. Neither input is modified.
    """
    merged: Dict[str, Dish] = {}
    seed_ids = set()
    for entry in seed_dishes or []:
        dish = _coerce(entry)
        if dish is None:
            continue
        dish.is_default = True
        merged[dish.id] = dish
        seed_ids.add(dish.id)

    for entry in stored_dishes or []:
        dish = _coerce(entry)
        if dish is None:
            continue
        dish.is_default = dish.id in seed_ids
        merged[dish.id] = dish
    return list(merged.values())


class DishCatalog:
    def __init__(self, dishes: Optional[Iterable[Dish]] = None, store: Optional[SnapshotStore] = None,
                 event_bus: Optional[EventBus] = None):
        self.dishes: List[Dish] = []
        for dish in dishes or []:
            if self.get(dish.id) is None:
                self.dishes.append(dish)
        self.store = store
        self.event_bus = event_bus or EventBus()

    # --- Queries ----------------------------------------------------------
    def get(self, dish_id: Optional[str]) -> Optional[Dish]:
        if not dish_id:
            return None
        for dish in self.dishes:
            if dish.id == dish_id:
                return dish
        return None

    def list_dishes(self) -> List[Dish]:
        return list(self.dishes)

    def planner_dishes(self) -> List[Dish]:
        '''Dishes offered as assignment choices.'''
        return [d for d in self.dishes if d.include_in_planner]

    # --- Mutations --------------------------------------------------------
    def add(self, name: str, ingredients=None, special: bool = False) -> Optional[Dish]:
        '''
        Adds a user dish. Returns None without touching the catalog when the name is blank.
        '''
        trimmed = name.strip() if isinstance(name, str) else ""
        if not trimmed:
            return None
        dish = Dish(name=trimmed, ingredients=clean_ingredients(ingredients), special=bool(special))
        while self.get(dish.id) is not None:
            dish.id = new_dish_id()
        self.dishes.append(dish)
        logger.debug("Added dish %s", dish)
        self._persist()
        return dish

    def edit(self, dish_id: str, name: str, ingredients=None, special: bool = False) -> Optional[Dish]:
        '''
        Replaces name, ingredients and special flag, keeping id and default status.
        Turning the special flag on signals the plan so it can keep one special per week.
        '''
        dish = self.get(dish_id)
        trimmed = name.strip() if isinstance(name, str) else ""
        if dish is None or not trimmed:
            return None
        became_special = bool(special) and not dish.special
        dish.name = trimmed
        dish.ingredients = clean_ingredients(ingredients)
        dish.special = bool(special)
        self._persist()
        if became_special:
            self.event_bus.publish(DISH_SPECIAL_SET, {"dish_id": dish.id, "name": dish.name})
        return dish

    def remove(self, dish_id: str) -> bool:
        '''
        Deletes a user dish and signals the plan to clear slots referencing it.
        Default dishes are never deleted.
        '''
        dish = self.get(dish_id)
        if dish is None or dish.is_default:
            return False
        self.dishes = [d for d in self.dishes if d.id != dish_id]
        self._persist()
        self.event_bus.publish(DISH_REMOVED, {"dish_id": dish.id, "name": dish.name})
        return True

    def set_include_in_planner(self, dish_id: str, include: bool) -> bool:
        dish = self.get(dish_id)
        if dish is None:
            return False
        dish.include_in_planner = bool(include)
        self._persist()
        if not dish.include_in_planner:
            self.event_bus.publish(DISH_EXCLUDED, {"dish_id": dish.id, "name": dish.name})
        return True

    # --- Persistence ------------------------------------------------------
    def to_dict(self):
        return [dish.to_dict() for dish in self.dishes]

    def _persist(self):
        save_quietly(self.store, DISHES_STORAGE_KEY, self.to_dict())

    def __str__(self) -> str:
        dishes_str = ",\n\t".join(str(d) for d in self.dishes)
        return f"Dishes:\n\t{dishes_str}"

    __repr__ = __str__
