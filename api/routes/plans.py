from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.auth import require_identity
from api.dependencies import get_db
from api.responses import success_response
from domain.enums import MealType
from domain.mappers import PlanMapper
from domain.schemas.plan_schemas import (
    GroceryListResponse,
    PlanEntryCreate,
    WeekViewResponse,
)
from domain.week import resolve_week, start_of_week
from services.planner_service import PlannerService
from services.session import Identity

router = APIRouter(prefix="/plans", tags=["Meal Planning"])
logger = logging.getLogger("mealgrid.api.plans")


@router.get("/week", response_model=WeekViewResponse)
def get_week(
    date: Optional[str] = Query(default=None, description="Any day of the week (YYYY-MM-DD); default today"),
    offset: int = Query(default=0, ge=-520, le=520, description="Weeks to move from that date"),
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """
    Week view: the 7 x 4 grid of (day, meal type) cells for one week.

    The plan for the week is created the first time it is opened.
    """
    week_start = resolve_week(date, offset)
    view = PlannerService.week_view(db, identity.user_id, week_start)
    return PlanMapper.to_week_view(view)


@router.post("/{week_start}/entries", status_code=status.HTTP_201_CREATED)
def add_entry(
    week_start: str,
    body: PlanEntryCreate,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Add a recipe or a free-text note to one cell."""
    entry = PlannerService.add_entry(
        db,
        identity.user_id,
        start_of_week(week_start),
        body.day,
        body.meal_type,
        recipe_id=body.recipe_id,
        notes=body.notes,
    )
    return success_response({"entry_id": str(entry.entry_id)}, "Entry added")


@router.delete("/{week_start}/entries/{entry_id}")
def remove_entry(
    week_start: str,
    entry_id: UUID,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    PlannerService.remove_entry(db, identity.user_id, start_of_week(week_start), entry_id)
    return success_response({"entry_id": str(entry_id)}, "Entry removed")


@router.delete("/{week_start}/cells/{day}/{meal_type}")
def clear_cell(
    week_start: str,
    day: int,
    meal_type: MealType,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Remove every entry from one (day, meal type) cell."""
    count = PlannerService.clear_cell(
        db, identity.user_id, start_of_week(week_start), day, meal_type
    )
    return success_response({"deleted": count}, "Cell cleared")


@router.delete("/{week_start}/entries")
def clear_week(
    week_start: str,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Remove every entry of the week. The plan itself is kept."""
    count = PlannerService.clear_week(db, identity.user_id, start_of_week(week_start))
    return success_response({"deleted": count}, "Week cleared")


@router.get("/{week_start}/groceries", response_model=GroceryListResponse)
def get_groceries(
    week_start: str,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Deduplicated ingredient lines of every recipe planned for the week."""
    monday = start_of_week(week_start)
    items = PlannerService.grocery_list(db, identity.user_id, monday)
    return GroceryListResponse(week_start=monday, items=items, count=len(items))
