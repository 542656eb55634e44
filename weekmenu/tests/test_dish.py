import unittest
from weekmenu.domain.Dish import Dish, clean_ingredients


class TestDish(unittest.TestCase):

    def test_from_dict_full_record(self):
        dish = Dish.from_dict({
            "id": "abc", "name": "  Tacos ", "ingredients": [" Tortillas", "beans "],
            "includeInPlanner": False, "isDefault": True, "special": True,
        })
        self.assertEqual(dish.id, "abc")
        self.assertEqual(dish.name, "Tacos")
        self.assertEqual(dish.ingredients, ["Tortillas", "beans"])
        self.assertFalse(dish.include_in_planner)
        self.assertTrue(dish.is_default)
        self.assertTrue(dish.special)

    def test_from_dict_defaults_optional_flags(self):
        dish = Dish.from_dict({"id": "x", "name": "Soup", "ingredients": []})
        self.assertTrue(dish.include_in_planner)
        self.assertFalse(dish.is_default)
        self.assertFalse(dish.special)

    def test_from_dict_malformed_fields(self):
        dish = Dish.from_dict({"name": "Stew", "ingredients": "carrot, potato"})
        self.assertEqual(dish.ingredients, [])
        self.assertTrue(dish.id)
        dish = Dish.from_dict({"id": "y", "name": "Stew", "ingredients": ["ok", 3, None, "  "]})
        self.assertEqual(dish.ingredients, ["ok"])

    def test_from_dict_drops_unnamed(self):
        self.assertIsNone(Dish.from_dict({"id": "z", "name": 42}))
        self.assertIsNone(Dish.from_dict({"id": "z", "name": "   "}))
        self.assertIsNone(Dish.from_dict("not a dict"))

    def test_to_dict_round_trip(self):
        dish = Dish("id-1", "Curry", ["Rice", "Chicken"], include_in_planner=False, special=True)
        self.assertEqual(Dish.from_dict(dish.to_dict()), dish)

    def test_clean_ingredients_splits_text(self):
        self.assertEqual(clean_ingredients("Chicken, pasta,, lemon "), ["Chicken", "pasta", "lemon"])
        self.assertEqual(clean_ingredients(None), [])
