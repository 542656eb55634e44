from fastapi import (
    FastAPI,
    Request,
    Query,
    Depends,
    HTTPException,
    Response,
)
from typing import Optional
from threading import Lock
import logging

from weekmenu.domain.Dish import Dish
from weekmenu.events.Event_Bus import GLOBAL_EVENT_BUS
from weekmenu.events.web_observers import start as start_event_observers, get_events as get_web_events
from weekmenu.infra.app_state import AppState, load_state
from weekmenu.infra.pdf_utils import generate_pdf_for_week
from weekmenu.infra.storage import JsonFileStore
from weekmenu.utilities.config import DATA_DIR
from weekmenu.utilities.validators import (
    DishInput,
    IncludeInPlannerInput,
    SlotAssignInput,
    PantryToggleInput,
    check_day_slot,
)

# Logging
logger = logging.getLogger("weekmenu_app")

_state_lock = Lock()


def get_state(request: Request) -> AppState:
    """Planner state for this app; loaded from the data directory on first use."""
    state = getattr(request.app.state, "planner", None)
    if state is not None:
        return state
    # sync routes run in a threadpool; build the state exactly once
    with _state_lock:
        state = getattr(request.app.state, "planner", None)
        if state is None:
            state = load_state(JsonFileStore(DATA_DIR), event_bus=GLOBAL_EVENT_BUS)
            start_event_observers(state.catalog.event_bus)
            request.app.state.planner = state
            logger.info("Planner state loaded from %s", DATA_DIR)
    return state


def _dish_or_404(state: AppState, dish_id: str) -> Dish:
    dish = state.catalog.get(dish_id)
    if dish is None:
        raise HTTPException(status_code=404, detail="Dish not found")
    return dish


def _check_slot(day: str, slot: str):
    if not check_day_slot(day, slot):
        raise HTTPException(status_code=400, detail="Invalid day or slot")


def _plan_payload(state: AppState):
    return {"plan": state.plan.to_dict(), "dishes": {d.id: d.name for d in state.catalog.dishes}}


def create_app(state: Optional[AppState] = None) -> FastAPI:
    app = FastAPI(title="Weekly Menu Planner API")
    if state is not None:
        app.state.planner = state
        start_event_observers(state.catalog.event_bus)

    # -------------------- DISHES --------------------
    @app.get("/api/dishes")
    def list_dishes(state: AppState = Depends(get_state)):
        return {"dishes": state.catalog.to_dict()}

    @app.post("/api/dishes")
    def add_dish(payload: DishInput, state: AppState = Depends(get_state)):
        dish = state.catalog.add(payload.name, payload.ingredients, payload.special)
        if dish is None:
            raise HTTPException(status_code=400, detail="Dish name cannot be empty")
        return dish.to_dict()

    @app.get("/api/dishes/{dish_id}")
    def get_dish(dish_id: str, state: AppState = Depends(get_state)):
        return _dish_or_404(state, dish_id).to_dict()

    @app.put("/api/dishes/{dish_id}")
    def edit_dish(dish_id: str, payload: DishInput, state: AppState = Depends(get_state)):
        _dish_or_404(state, dish_id)
        dish = state.catalog.edit(dish_id, payload.name, payload.ingredients, payload.special)
        if dish is None:
            raise HTTPException(status_code=400, detail="Dish name cannot be empty")
        return dish.to_dict()

    @app.delete("/api/dishes/{dish_id}")
    def delete_dish(dish_id: str, state: AppState = Depends(get_state)):
        dish = _dish_or_404(state, dish_id)
        if dish.is_default:
            raise HTTPException(status_code=400, detail="Default dishes cannot be deleted")
        state.catalog.remove(dish_id)
        return {"status": "deleted", "id": dish_id}

    @app.post("/api/dishes/{dish_id}/planner")
    def set_include_in_planner(dish_id: str, payload: IncludeInPlannerInput, state: AppState = Depends(get_state)):
        _dish_or_404(state, dish_id)
        state.catalog.set_include_in_planner(dish_id, payload.include)
        return state.catalog.get(dish_id).to_dict()

    # -------------------- PLAN --------------------
    @app.get("/api/plan")
    def get_plan(state: AppState = Depends(get_state)):
        return _plan_payload(state)

    @app.put("/api/plan/{day}/{slot}")
    def assign_slot(day: str, slot: str, payload: SlotAssignInput, state: AppState = Depends(get_state)):
        _check_slot(day, slot)
        if payload.dish_id:
            dish = _dish_or_404(state, payload.dish_id)
            if not dish.include_in_planner:
                raise HTTPException(status_code=400, detail="Dish is not included in the planner")
        if not state.plan.assign(day, slot, payload.dish_id):
            raise HTTPException(status_code=409, detail="Another special dish is already planned this week")
        return _plan_payload(state)

    @app.delete("/api/plan/{day}/{slot}")
    def clear_slot(day: str, slot: str, state: AppState = Depends(get_state)):
        _check_slot(day, slot)
        state.plan.clear(day, slot)
        return _plan_payload(state)

    @app.post("/api/plan/reset")
    def reset_plan(state: AppState = Depends(get_state)):
        state.plan.reset()
        return _plan_payload(state)

    @app.get("/api/plan/{day}/{slot}/options")
    def slot_options(day: str, slot: str, state: AppState = Depends(get_state)):
        _check_slot(day, slot)
        return {
            "day": day,
            "slot": slot,
            "current": state.plan.get(day, slot),
            "special_elsewhere": state.plan.has_special_elsewhere(day, slot),
            "options": state.plan.options_for(day, slot),
        }

    # -------------------- PANTRY --------------------
    @app.get("/api/pantry")
    def get_pantry(state: AppState = Depends(get_state)):
        return {"items": state.pantry.to_dict(), "available": state.pantry.available_names()}

    @app.post("/api/pantry")
    def toggle_pantry(payload: PantryToggleInput, state: AppState = Depends(get_state)):
        if not state.pantry.set_available(payload.name, payload.available):
            raise HTTPException(status_code=400, detail="Ingredient name cannot be empty")
        return {"name": payload.name.strip(), "available": state.pantry.is_available(payload.name)}

    # -------------------- SHOPPING LIST --------------------
    @app.get("/api/shopping-list")
    @app.get("/api/shopping-list/")
    def api_shopping_list(state: AppState = Depends(get_state)):
        aggregated, to_buy = state.shopping_list()
        return {"items": aggregated, "to_buy": to_buy, "count": len(to_buy)}

    # -------------------- EVENTS / EXPORT --------------------
    @app.get("/api/events")
    def api_events(since: Optional[int] = Query(default=None), state: AppState = Depends(get_state)):
        return get_web_events(since)

    @app.get("/export_pdf")
    def export_pdf(include_shopping: bool = Query(default=True), state: AppState = Depends(get_state)):
        _, to_buy = state.shopping_list()
        pdf_bytes = generate_pdf_for_week(state.plan, to_buy if include_shopping else None)
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": "attachment; filename=weekly_menu.pdf"},
        )

    return app


app = create_app()
