import time
import unittest
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace
from unittest import mock
from fastapi.testclient import TestClient
from weekmenu.api.api_run import create_app, get_state
from weekmenu.infra.app_state import load_state
from weekmenu.infra.storage import MemoryStore

SEED = [
    {"id": "seed-rib", "name": "Prime Rib", "ingredients": ["Beef"], "special": True},
    {"id": "seed-soup", "name": "Tomato Soup", "ingredients": ["Tomatoes", "Bread"]},
]


class TestPlannerAPI(unittest.TestCase):

    def setUp(self):
        self.state = load_state(MemoryStore(), seed=SEED)
        self.client = TestClient(create_app(self.state))

    def _add(self, name, ingredients, special=False):
        resp = self.client.post("/api/dishes", json={"name": name, "ingredients": ingredients, "special": special})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def test_list_dishes_includes_seed(self):
        resp = self.client.get("/api/dishes")
        self.assertEqual(resp.status_code, 200)
        dishes = resp.json()["dishes"]
        self.assertEqual([d["id"] for d in dishes], ["seed-rib", "seed-soup"])
        self.assertTrue(all(d["isDefault"] for d in dishes))

    def test_add_with_comma_text(self):
        dish = self._add("Tacos", "Tortillas, beans")
        self.assertEqual(dish["ingredients"], ["Tortillas", "beans"])
        self.assertFalse(dish["isDefault"])

    def test_add_blank_name_rejected(self):
        resp = self.client.post("/api/dishes", json={"name": "   ", "ingredients": []})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(len(self.state.catalog.dishes), 2)

    def test_edit_and_unknown_dish(self):
        dish = self._add("Pasta", ["Pasta"])
        resp = self.client.put(f"/api/dishes/{dish['id']}", json={"name": "Pasta pesto", "ingredients": ["Pasta", "pesto"]})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Pasta pesto")
        self.assertEqual(self.client.get("/api/dishes/missing").status_code, 404)

    def test_delete_default_rejected(self):
        self.assertEqual(self.client.delete("/api/dishes/seed-rib").status_code, 400)
        self.assertIsNotNone(self.state.catalog.get("seed-rib"))

    def test_delete_clears_plan(self):
        dish = self._add("Tacos", ["Tortillas"])
        self.client.put("/api/plan/Monday/primary", json={"dish_id": dish["id"]})
        resp = self.client.delete(f"/api/dishes/{dish['id']}")
        self.assertEqual(resp.status_code, 200)
        plan = self.client.get("/api/plan").json()["plan"]
        self.assertIsNone(plan["Monday"]["primary"])

    def test_special_conflict_returns_409(self):
        seafood = self._add("Seafood", ["Shrimp"], special=True)
        resp = self.client.put("/api/plan/Monday/primary", json={"dish_id": "seed-rib"})
        self.assertEqual(resp.status_code, 200)
        resp = self.client.put("/api/plan/Tuesday/primary", json={"dish_id": seafood["id"]})
        self.assertEqual(resp.status_code, 409)
        self.assertIsNone(self.state.plan.get("Tuesday", "primary"))
        events = self.client.get("/api/events").json()["events"]
        self.assertTrue(any(e["type"] == "plan.assignment_rejected" and e.get("day") == "Tuesday" for e in events))

    def test_invalid_slot(self):
        resp = self.client.put("/api/plan/Monday/lunch", json={"dish_id": "seed-soup"})
        self.assertEqual(resp.status_code, 400)

    def test_slot_options(self):
        self.client.put("/api/plan/Monday/primary", json={"dish_id": "seed-rib"})
        data = self.client.get("/api/plan/Friday/secondary/options").json()
        self.assertTrue(data["special_elsewhere"])
        options = {o["id"]: o for o in data["options"]}
        self.assertTrue(options["seed-rib"]["disabled"])
        self.assertFalse(options["seed-soup"]["disabled"])

    def test_exclude_from_planner(self):
        self.client.put("/api/plan/Sunday/secondary", json={"dish_id": "seed-soup"})
        resp = self.client.post("/api/dishes/seed-soup/planner", json={"include": False})
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["includeInPlanner"])
        self.assertIsNone(self.state.plan.get("Sunday", "secondary"))
        resp = self.client.put("/api/plan/Sunday/secondary", json={"dish_id": "seed-soup"})
        self.assertEqual(resp.status_code, 400)

    def test_shopping_list_with_pantry(self):
        tacos = self._add("Tacos", ["Tortillas", "beans"])
        self.client.put("/api/plan/Monday/primary", json={"dish_id": tacos["id"]})
        resp = self.client.post("/api/pantry", json={"name": "tortillas", "available": True})
        self.assertEqual(resp.status_code, 200)
        data = self.client.get("/api/shopping-list").json()
        self.assertEqual(data["items"], [{"name": "beans", "count": 1}, {"name": "Tortillas", "count": 1}])
        self.assertEqual(data["to_buy"], [{"name": "beans", "count": 1}])
        self.assertEqual(data["count"], 1)

    def test_clear_and_reset(self):
        self.client.put("/api/plan/Monday/primary", json={"dish_id": "seed-soup"})
        self.client.put("/api/plan/Monday/secondary", json={"dish_id": "seed-soup"})
        self.client.delete("/api/plan/Monday/primary")
        self.assertIsNone(self.state.plan.get("Monday", "primary"))
        self.client.post("/api/plan/reset")
        self.assertEqual(self.state.plan.planned_dish_ids(), [])

    def test_export_pdf(self):
        self.client.put("/api/plan/Monday/primary", json={"dish_id": "seed-soup"})
        resp = self.client.get("/export_pdf")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))


class TestLazyState(unittest.TestCase):

    def test_concurrent_first_requests_build_state_once(self):
        built = []

        def slow_load(*args, **kwargs):
            time.sleep(0.05)
            state = load_state(MemoryStore(), seed=SEED)
            built.append(state)
            return state

        request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))
        with mock.patch("weekmenu.api.api_run.load_state", side_effect=slow_load):
            with ThreadPoolExecutor(max_workers=8) as pool:
                states = list(pool.map(lambda _: get_state(request), range(8)))
        self.assertEqual(len(built), 1)
        self.assertTrue(all(s is built[0] for s in states))
        self.assertIs(request.app.state.planner, built[0])
