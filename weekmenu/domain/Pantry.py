"""Pantry availability: ingredient names marked as already at home."""
import logging
from typing import Dict, List, Optional

from weekmenu.infra.storage import SnapshotStore, save_quietly
from weekmenu.utilities.constants import PANTRY_STORAGE_KEY

logger = logging.getLogger(__name__)


def ingredient_key(name) -> str:
    '''Case-insensitive identity of an ingredient name.'''
    return name.strip().lower() if isinstance(name, str) else ""


class PantryAvailability:
    def __init__(self, items: Optional[Dict[str, bool]] = None, store: Optional[SnapshotStore] = None):
        self.items: Dict[str, bool] = {}
        for name, available in (items or {}).items():
            key = ingredient_key(name)
            if key:
                self.items[key] = bool(available)
        self.store = store

    def set_available(self, ingredient_name: str, available: bool) -> bool:
        '''
        Marks an ingredient as available (or not). Blank names are ignored.
        '''
        key = ingredient_key(ingredient_name)
        if not key:
            return False
        self.items[key] = bool(available)
        self._persist()
        return True

    def is_available(self, ingredient_name: str) -> bool:
        return self.items.get(ingredient_key(ingredient_name), False)

    def available_names(self) -> List[str]:
        return sorted(k for k, v in self.items.items() if v)

    def to_dict(self):
        return dict(self.items)

    def _persist(self):
        save_quietly(self.store, PANTRY_STORAGE_KEY, self.to_dict())

    def __str__(self) -> str:
        return f"Available: {', '.join(self.available_names()) or '-'}"

    __repr__ = __str__
