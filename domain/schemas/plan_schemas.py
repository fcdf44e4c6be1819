from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from domain.enums import MealType


class PlanEntryCreate(BaseModel):
    day: int = Field(..., ge=0, le=6, description="0 = Monday .. 6 = Sunday")
    meal_type: MealType
    recipe_id: Optional[UUID] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def one_of_recipe_or_notes(self):
        if self.notes is not None:
            self.notes = self.notes.strip() or None
        if self.recipe_id is not None and self.notes is not None:
            raise ValueError("An entry holds either a recipe or a note, not both")
        return self


class GridItemResponse(BaseModel):
    entry_id: Optional[UUID] = None
    day: int
    meal_type: MealType
    recipe_id: Optional[UUID] = None
    notes: Optional[str] = None
    label: str


class WeekViewResponse(BaseModel):
    plan_id: UUID
    week_start: date
    week_end: date
    previous_week: date
    next_week: date
    days: List[date]
    meal_types: List[MealType]
    grid: Dict[str, Dict[str, List[GridItemResponse]]]
    entry_count: int


class GroceryListResponse(BaseModel):
    week_start: date
    items: List[str]
    count: int
