from typing import Final

DAYS_OF_WEEK: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
)
PLAN_SLOTS: Final[tuple[str, ...]] = ("primary", "secondary")

DISHES_STORAGE_KEY: Final[str] = "weekly-menu-dishes"
PLAN_STORAGE_KEY: Final[str] = "weekly-menu-plan"
PANTRY_STORAGE_KEY: Final[str] = "weekly-menu-pantry"

# Seed dishes merged into the catalog at startup (always isDefault)
DEFAULT_DISHES: Final[list[dict]] = [
    {
        "id": "default-spaghetti-bolognese",
        "name": "Spaghetti Bolognese",
        "ingredients": ["Spaghetti", "Ground beef", "Tomato sauce", "Onion", "Garlic", "Parmesan"],
        "includeInPlanner": True,
        "special": False,
    },
    {
        "id": "default-chicken-curry",
        "name": "Chicken Curry",
        "ingredients": ["Chicken breast", "Curry paste", "Coconut milk", "Rice", "Onion"],
        "includeInPlanner": True,
        "special": False,
    },
    {
        "id": "default-tacos",
        "name": "Tacos",
        "ingredients": ["Tortillas", "Beans", "Ground beef", "Salsa", "Cheddar"],
        "includeInPlanner": True,
        "special": False,
    },
    {
        "id": "default-vegetable-stir-fry",
        "name": "Vegetable Stir Fry",
        "ingredients": ["Bell pepper", "Broccoli", "Soy sauce", "Garlic", "Rice"],
        "includeInPlanner": True,
        "special": False,
    },
    {
        "id": "default-tomato-soup",
        "name": "Tomato Soup",
        "ingredients": ["Tomatoes", "Onion", "Garlic", "Cream", "Bread"],
        "includeInPlanner": True,
        "special": False,
    },
    {
        "id": "default-prime-rib",
        "name": "Prime Rib",
        "ingredients": ["Prime rib roast", "Rosemary", "Garlic", "Potatoes"],
        "includeInPlanner": True,
        "special": True,
    },
]
