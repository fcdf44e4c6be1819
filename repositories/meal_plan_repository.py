"""
Meal Plan Repository - Data access layer for meal plan operations
"""

from datetime import date
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import MealType
from domain.models import MealPlan, PlanEntry


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def get_for_week(self, user_id: UUID, week_start: date) -> Optional[MealPlan]:
        """Get the user's plan for the week starting on ``week_start``"""
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.user_id == user_id, MealPlan.week_start == week_start)
            .first()
        )


class PlanEntryRepository(BaseRepository[PlanEntry]):
    """Repository for plan entry data access"""

    def __init__(self, db: Session):
        super().__init__(db, PlanEntry)

    def add(self, entry: PlanEntry) -> PlanEntry:
        """Add an entry, stamping it after every entry already in its plan"""
        if entry.position is None:
            entry.position = self.next_position(entry.plan_id)
        return super().add(entry)

    def next_position(self, plan_id: UUID) -> int:
        last = (
            self.db.query(func.max(PlanEntry.position))
            .filter(PlanEntry.plan_id == plan_id)
            .scalar()
        )
        return (last or 0) + 1

    def get_in_plan(self, plan_id: UUID, entry_id: UUID) -> Optional[PlanEntry]:
        return (
            self.db.query(PlanEntry)
            .filter(PlanEntry.plan_id == plan_id, PlanEntry.entry_id == entry_id)
            .first()
        )

    def list_for_plan(self, plan_id: UUID) -> List[PlanEntry]:
        """All entries of a plan ordered by day, then insertion"""
        return (
            self.db.query(PlanEntry)
            .filter(PlanEntry.plan_id == plan_id)
            .order_by(PlanEntry.day, PlanEntry.position, PlanEntry.entry_id)
            .all()
        )

    def delete_cell(self, plan_id: UUID, day: int, meal_type: MealType) -> int:
        """Delete every entry in one (day, meal type) cell; return the count"""
        count = (
            self.db.query(PlanEntry)
            .filter(
                PlanEntry.plan_id == plan_id,
                PlanEntry.day == day,
                PlanEntry.meal_type == meal_type,
            )
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count

    def delete_for_plan(self, plan_id: UUID) -> int:
        count = (
            self.db.query(PlanEntry)
            .filter(PlanEntry.plan_id == plan_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count
