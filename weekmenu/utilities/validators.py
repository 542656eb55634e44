"""
Input validation schemas using Pydantic for the HTTP layer.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union

from weekmenu.domain.Dish import clean_ingredients
from weekmenu.utilities.constants import DAYS_OF_WEEK, PLAN_SLOTS


class DishInput(BaseModel):
    """Schema for creating or editing a dish.

    Blank names are accepted here and left to the catalog, which ignores them.
    """
    name: str = Field(default="", max_length=200)
    ingredients: Union[List[str], str] = Field(default_factory=list)
    special: bool = False

    @field_validator('ingredients')
    @classmethod
    def split_ingredients(cls, v):
        """Accept a list or comma-separated text; trim and drop empty entries."""
        return clean_ingredients(v)


class IncludeInPlannerInput(BaseModel):
    include: bool


class SlotAssignInput(BaseModel):
    dish_id: Optional[str] = None


class PantryToggleInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    available: bool = True


def check_day_slot(day: str, slot: str) -> bool:
    return day in DAYS_OF_WEEK and slot in PLAN_SLOTS
