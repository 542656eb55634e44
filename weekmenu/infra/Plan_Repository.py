"""Plan repository helpers (parse + load through a snapshot store)."""
import logging
from typing import Any, Dict, Optional

from weekmenu.domain.Plan import empty_meals
from weekmenu.infra.storage import SnapshotStore, load_quietly
from weekmenu.utilities.constants import DAYS_OF_WEEK, PLAN_SLOTS, PLAN_STORAGE_KEY

logger = logging.getLogger(__name__)


def _slot_value(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def parse_plan(raw: Any) -> Dict[str, Dict[str, Optional[str]]]:
    """Normalize a persisted plan into {day: {primary, secondary}}.

    Accepts the legacy shape where a day maps straight to a dish id (or null);
    that value becomes the primary slot. Unknown days and non-string slot values
    are ignored, and a non-mapping payload yields an empty week.
    """
    meals = empty_meals()
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Stored plan is not a mapping (%s); starting empty", type(raw).__name__)
        return meals
    for day in DAYS_OF_WEEK:
        value = raw.get(day)
        if isinstance(value, dict):
            for slot in PLAN_SLOTS:
                meals[day][slot] = _slot_value(value.get(slot))
        else:
            # legacy single-dish day
            meals[day]["primary"] = _slot_value(value)
    return meals


def load_plan_meals(store: Optional[SnapshotStore]) -> Dict[str, Dict[str, Optional[str]]]:
    return parse_plan(load_quietly(store, PLAN_STORAGE_KEY))
