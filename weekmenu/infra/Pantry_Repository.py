"""Pantry availability repository helpers."""
import logging
from typing import Any, Dict, Optional

from weekmenu.domain.Pantry import ingredient_key
from weekmenu.infra.storage import SnapshotStore, load_quietly
from weekmenu.utilities.constants import PANTRY_STORAGE_KEY

logger = logging.getLogger(__name__)


def parse_pantry(raw: Any) -> Dict[str, bool]:
    """Lower-cased ingredient name -> availability; entries with non-bool values are skipped."""
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Stored pantry is not a mapping (%s); starting empty", type(raw).__name__)
        return {}
    items: Dict[str, bool] = {}
    for name, available in raw.items():
        key = ingredient_key(name)
        if key and isinstance(available, bool):
            items[key] = available
    return items


def load_pantry_items(store: Optional[SnapshotStore]) -> Dict[str, bool]:
    return parse_pantry(load_quietly(store, PANTRY_STORAGE_KEY))
