"""Session, catalog, log and profile endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from diet_tracker.api.models import (
    ActiveDateRequest,
    BasicFoodRequest,
    CalculationMethodRequest,
    CompositeFoodRequest,
    EntryRequest,
    LoginRequest,
    ProfileUpdateRequest,
)
from diet_tracker.domain.foods import Component, CompositeFood, Food
from diet_tracker.domain.log import DaySummary
from diet_tracker.domain.profiles import Profile
from diet_tracker.domain.undo import EntryAdded, EntryRemoved, UndoRecord

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer
    from diet_tracker.services.session import TrackerSession

router = APIRouter()


def _session(request: Request) -> TrackerSession:
    container: AppContainer = request.app.state.container
    return container.session


@router.post("/session/login")
async def login(body: LoginRequest, request: Request) -> dict[str, object]:
    """Start a session and return today's summary."""
    summary = _session(request).login(body.username)
    return {"username": body.username, "summary": _summary_payload(summary)}


@router.post("/session/logout")
async def logout(request: Request) -> dict[str, str]:
    """Save and end the session."""
    _session(request).logout()
    return {"status": "ok"}


@router.post("/session/save")
async def save(request: Request) -> dict[str, str]:
    """Persist the current user's data."""
    _session(request).save()
    return {"status": "ok"}


@router.get("/session")
async def session_state(request: Request) -> dict[str, object]:
    """Return the session's active date and calculation method."""
    session = _session(request)
    return {
        "username": session.username,
        "active_date": session.active_date.isoformat(),
        "calculation_method": session.calculation_method.value,
    }


@router.put("/session/date")
async def set_active_date(
    body: ActiveDateRequest, request: Request
) -> dict[str, object]:
    """Change the active date."""
    return _summary_payload(_session(request).set_active_date(body.day))


@router.put("/session/method")
async def set_method(
    body: CalculationMethodRequest, request: Request
) -> dict[str, object]:
    """Switch the calorie calculation method."""
    return _summary_payload(_session(request).set_calculation_method(body.method))


@router.get("/foods")
async def search_foods(
    request: Request,
    q: str | None = None,
    match_all: bool = False,
    ranked: bool = False,
) -> dict[str, object]:
    """Search the catalog by keywords."""
    foods = _session(request).search_foods(q, match_all=match_all, ranked=ranked)
    return {"foods": [_food_payload(food) for food in foods]}


@router.get("/foods/{food_id}")
async def get_food(food_id: str, request: Request) -> dict[str, object]:
    """Return a single food."""
    return _food_payload(_session(request).get_food(food_id))


@router.post("/foods/basic", status_code=status.HTTP_201_CREATED)
async def add_basic_food(body: BasicFoodRequest, request: Request) -> dict[str, object]:
    """Add a basic food to the catalog."""
    food = _session(request).add_basic_food(
        body.id, body.keywords, body.calories_per_serving, name=body.name
    )
    return _food_payload(food)


@router.post("/foods/composite", status_code=status.HTTP_201_CREATED)
async def add_composite_food(
    body: CompositeFoodRequest, request: Request
) -> dict[str, object]:
    """Add a composite food to the catalog."""
    food = _session(request).add_composite_food(
        body.id,
        body.keywords,
        [Component(item.food_id, item.servings) for item in body.components],
        name=body.name,
    )
    return _food_payload(food)


@router.get("/log")
async def view_log(request: Request) -> dict[str, object]:
    """Return the active date's entries and totals."""
    session = _session(request)
    entries = session.list_entries()
    return {
        "entries": [asdict(entry) for entry in entries],
        "summary": _summary_payload(session.summary()),
    }


@router.post("/log/entries", status_code=status.HTTP_201_CREATED)
async def add_entry(body: EntryRequest, request: Request) -> dict[str, object]:
    """Log servings of a food on the active date."""
    return _summary_payload(_session(request).add_entry(body.food_id, body.servings))


@router.delete("/log/entries/{position}")
async def remove_entry(position: int, request: Request) -> dict[str, object]:
    """Remove an entry by its 1-based position."""
    return _summary_payload(_session(request).remove_entry(position))


@router.post("/log/undo")
async def undo_log(request: Request) -> dict[str, object]:
    """Undo the last log change."""
    record, summary = _session(request).undo_log()
    return {"undone": _undo_payload(record), "summary": _summary_payload(summary)}


@router.get("/profile")
async def get_profile(request: Request) -> dict[str, object]:
    """Return the profile in effect on the active date."""
    return _profile_payload(_session(request).current_profile())


@router.put("/profile")
async def update_profile(
    body: ProfileUpdateRequest, request: Request
) -> dict[str, object]:
    """Update profile fields from the active date onward."""
    fields = body.model_dump(exclude_none=True)
    return _summary_payload(_session(request).update_profile(fields))


@router.post("/profile/undo")
async def undo_profile(request: Request) -> dict[str, object]:
    """Undo the last profile update."""
    record, summary = _session(request).undo_profile()
    return {"undone": _undo_payload(record), "summary": _summary_payload(summary)}


def _summary_payload(summary: DaySummary) -> dict[str, object]:
    return {
        "day": summary.day.isoformat(),
        "consumed": summary.consumed,
        "target": summary.target,
        "difference": summary.difference,
    }


def _food_payload(food: Food) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": food.id,
        "name": food.name,
        "keywords": list(food.keywords),
        "calories_per_serving": food.calories_per_serving,
        "composite": food.is_composite,
    }
    if isinstance(food, CompositeFood):
        payload["components"] = [asdict(item) for item in food.components]
    return payload


def _profile_payload(profile: Profile) -> dict[str, object]:
    return {
        "day": profile.day.isoformat(),
        "gender": profile.gender.value,
        "height_cm": profile.height_cm,
        "age": profile.age,
        "weight_kg": profile.weight_kg,
        "activity_level": int(profile.activity_level),
    }


def _undo_payload(record: UndoRecord) -> dict[str, object]:
    if isinstance(record, EntryAdded):
        return {"kind": "entry_added", "day": record.day.isoformat()}
    if isinstance(record, EntryRemoved):
        return {
            "kind": "entry_removed",
            "day": record.day.isoformat(),
            "position": record.position,
        }
    return {"kind": "profile_changed", "day": record.day.isoformat()}
