"""Dish list repository helpers (parse + load/save through a snapshot store)."""
import logging
from typing import Any, Dict, List, Optional

from weekmenu.domain.Dish import Dish
from weekmenu.infra.storage import SnapshotStore, load_quietly, save_quietly
from weekmenu.utilities.constants import DISHES_STORAGE_KEY

logger = logging.getLogger(__name__)


def parse_dishes(raw: Any) -> List[Dish]:
    """Turn a persisted dish list into Dish objects; anything unusable is dropped."""
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Stored dishes are not a list (%s); starting empty", type(raw).__name__)
        return []
    # a later entry with the same id replaces the earlier one in place
    by_id: Dict[str, Dish] = {}
    for entry in raw:
        dish = Dish.from_dict(entry)
        if dish is not None:
            by_id[dish.id] = dish
    dropped = len(raw) - len(by_id)
    if dropped:
        logger.warning(f"Dropped {dropped} malformed or duplicate stored dish(es)")
    return list(by_id.values())


def load_dish_records(store: Optional[SnapshotStore]) -> List[Any]:
    '''Raw stored records, for merging with the seed list.'''
    raw = load_quietly(store, DISHES_STORAGE_KEY)
    return raw if isinstance(raw, list) else []


def save_dishes(store: Optional[SnapshotStore], dishes: List[Dish]) -> None:
    save_quietly(store, DISHES_STORAGE_KEY, [d.to_dict() for d in dishes])
