"""Shopping list builder.

Provides aggregate(catalog, plan) and filter_to_buy(aggregated, pantry).
Both recompute from the current snapshots on every call.
"""
from typing import Dict, List, Any, Optional

from weekmenu.domain.Dish_Catalog import DishCatalog
from weekmenu.domain.Pantry import PantryAvailability, ingredient_key
from weekmenu.domain.Plan import WeeklyPlan


def _sort_key(item: Dict[str, Any]):
    return (item['name'].lower(), item['name'])


def aggregate(catalog: DishCatalog, plan: WeeklyPlan) -> List[Dict[str, Any]]:
    """Count ingredients across every planned slot.

    Args:
        catalog: DishCatalog used to resolve dish ids.
        plan: WeeklyPlan whose primary and secondary slots are scanned.

    Returns:
        List of dicts { name, count } sorted case-insensitively by name. Ingredients
        differing only in case or surrounding whitespace share one entry whose name is
        the first spelling met (days Monday..Sunday, primary before secondary).
        Stale dish ids are skipped.
    """
    counts: Dict[str, Dict[str, Any]] = {}
    for dish_id in plan.planned_dish_ids():
        dish = catalog.get(dish_id)
        if dish is None:
            continue
        for ingredient in dish.ingredients:
            key = ingredient_key(ingredient)
            if not key:
                continue
            if key not in counts:
                counts[key] = {'name': ingredient.strip(), 'count': 0}
            counts[key]['count'] += 1

    return sorted(counts.values(), key=_sort_key)


def filter_to_buy(aggregated: List[Dict[str, Any]], pantry: Optional[PantryAvailability]) -> List[Dict[str, Any]]:
    """Drop entries already available at home, keeping the input order."""
    if pantry is None:
        return list(aggregated)
    return [item for item in aggregated if not pantry.is_available(item['name'])]


def build_shopping_list(catalog: DishCatalog, plan: WeeklyPlan, pantry: Optional[PantryAvailability] = None):
    '''Returns (aggregated, to_buy) for the current week.'''
    aggregated = aggregate(catalog, plan)
    return aggregated, filter_to_buy(aggregated, pantry)


__all__ = ['aggregate', 'filter_to_buy', 'build_shopping_list']
