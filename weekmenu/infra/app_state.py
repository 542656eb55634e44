"""Startup wiring: load stored snapshots, merge seed dishes and link the plan to the catalog."""
import logging
from typing import Iterable, Optional

from weekmenu.domain.Dish_Catalog import DishCatalog, merge_with_seed
from weekmenu.domain.Pantry import PantryAvailability
from weekmenu.domain.Plan import WeeklyPlan
from weekmenu.events.Event_Bus import EventBus
from weekmenu.infra.Dish_Repository import load_dish_records, save_dishes
from weekmenu.infra.Pantry_Repository import load_pantry_items
from weekmenu.infra.Plan_Repository import load_plan_meals
from weekmenu.infra.storage import MemoryStore, SnapshotStore
from weekmenu.logic.shopping.list_builder import build_shopping_list
from weekmenu.utilities.constants import DEFAULT_DISHES

logger = logging.getLogger(__name__)


class AppState:
    def __init__(self, catalog: DishCatalog, plan: WeeklyPlan, pantry: PantryAvailability,
                 store: Optional[SnapshotStore] = None):
        self.catalog = catalog
        self.plan = plan
        self.pantry = pantry
        self.store = store

    def shopping_list(self):
        '''Returns (aggregated, to_buy) from the current snapshots.'''
        return build_shopping_list(self.catalog, self.plan, self.pantry)


def load_state(store: Optional[SnapshotStore] = None, seed: Optional[Iterable] = None,
               event_bus: Optional[EventBus] = None) -> AppState:
    """Build the three stores from persisted state; malformed input degrades to empty defaults."""
    store = store if store is not None else MemoryStore()
    seed_dishes = DEFAULT_DISHES if seed is None else seed

    dishes = merge_with_seed(load_dish_records(store), seed_dishes)
    save_dishes(store, dishes)
    catalog = DishCatalog(dishes, store=store, event_bus=event_bus)
    plan = WeeklyPlan(catalog, load_plan_meals(store), store=store)
    pantry = PantryAvailability(load_pantry_items(store), store=store)
    logger.info("Loaded %d dish(es), %d planned slot(s), %d pantry item(s)",
                len(catalog.dishes), len(plan.planned_dish_ids()), len(pantry.items))
    return AppState(catalog, plan, pantry, store)
