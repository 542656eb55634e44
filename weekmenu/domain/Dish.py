"""Dish domain entity: id, name, ingredient tags and planner flags."""
from typing import Iterable, List, Optional, Union
from uuid import uuid4


def new_dish_id() -> str:
    return uuid4().hex


def clean_ingredients(ingredients: Union[str, Iterable, None]) -> List[str]:
    '''Trims ingredient strings and drops empty ones. A comma-separated string is split first.'''
    if ingredients is None:
        return []
    if isinstance(ingredients, str):
        ingredients = ingredients.split(",")
    return [ing.strip() for ing in ingredients if isinstance(ing, str) and ing.strip()]


class Dish:
    def __init__(self, id: str = "", name: str = "", ingredients: Optional[List[str]] = None,
                 include_in_planner: bool = True, is_default: bool = False, special: bool = False):
        self.id = id or new_dish_id()
        self.name = name
        self.ingredients = ingredients[:] if ingredients else []
        self.include_in_planner = include_in_planner
        self.is_default = is_default
        self.special = special

    def __str__(self) -> str:
        flags = []
        if self.is_default:
            flags.append("default")
        if self.special:
            flags.append("special")
        if not self.include_in_planner:
            flags.append("hidden")
        parts = [f"{self.name} [{self.id}]", ", ".join(self.ingredients) or "No ingredients"]
        if flags:
            parts.append("Flags: " + ", ".join(flags))
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dish):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def copy(self) -> "Dish":
        return Dish(self.id, self.name, self.ingredients, self.include_in_planner,
                    self.is_default, self.special)

    @staticmethod
    def from_dict(data) -> Optional["Dish"]:
        '''
        Builds a Dish from a persisted record, normalizing malformed fields.
        Non-string name becomes "", non-list ingredients become [], a missing id is regenerated.
        Returns None when the record is not a mapping or the name is empty after trimming.
        '''
        if not isinstance(data, dict):
            return None
        name = data.get("name")
        name = name.strip() if isinstance(name, str) else ""
        if not name:
            return None
        raw_ingredients = data.get("ingredients")
        ingredients = clean_ingredients(raw_ingredients) if isinstance(raw_ingredients, list) else []
        dish_id = data.get("id")
        return Dish(
            id=dish_id if isinstance(dish_id, str) and dish_id else new_dish_id(),
            name=name,
            ingredients=ingredients,
            include_in_planner=data.get("includeInPlanner", True) is not False,
            is_default=data.get("isDefault") is True,
            special=data.get("special") is True,
        )

    def to_dict(self):
        '''Converts the Dish to the persisted dish-list record.'''
        return {
            "id": self.id,
            "name": self.name,
            "ingredients": list(self.ingredients),
            "includeInPlanner": self.include_in_planner,
            "isDefault": self.is_default,
            "special": self.special,
        }
