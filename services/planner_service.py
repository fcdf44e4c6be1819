"""
Weekly meal planner: lazy per-week plans, entry commands and week queries.

Commands report only success (or a deleted count); callers re-read the week
afterwards rather than patching a local copy.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.enums import DAYS_PER_WEEK, MealType
from domain.models import MealPlan, PlanEntry
from domain.week import DateLike, start_of_week
from repositories import MealPlanRepository, PlanEntryRepository, RecipeRepository
from services.grocery import aggregate, recipe_ids_in
from services.week_grid import PlanEntrySnapshot, WeekGrid, project

logger = logging.getLogger("mealgrid.planner")


@dataclass
class WeekView:
    plan: MealPlan
    week_start: date
    entries: List[PlanEntry]
    titles: Dict[uuid.UUID, str]
    grid: WeekGrid


def _meal_type(value: Union[MealType, str]) -> MealType:
    try:
        return MealType(value)
    except ValueError:
        raise ServiceValidationError(
            f"Unknown meal type: {value!r}",
            code="INVALID_MEAL_TYPE",
            details={"allowed": [m.value for m in MealType]},
        )


def _day(value: int) -> int:
    if not isinstance(value, int) or not 0 <= value < DAYS_PER_WEEK:
        raise ServiceValidationError(
            f"Day must be between 0 (Monday) and 6 (Sunday), got {value!r}",
            code="INVALID_DAY",
        )
    return value


class PlannerService:
    @staticmethod
    def get_plan(db: Session, user_id: uuid.UUID, week_start: DateLike) -> Optional[MealPlan]:
        return MealPlanRepository(db).get_for_week(user_id, start_of_week(week_start))

    @staticmethod
    def get_or_create_plan(db: Session, user_id: uuid.UUID, week_start: DateLike) -> MealPlan:
        """Fetch the user's plan for the week, creating it on first access."""
        monday = start_of_week(week_start)
        plan_repo = MealPlanRepository(db)
        plan = plan_repo.get_for_week(user_id, monday)
        if plan:
            return plan
        try:
            plan = plan_repo.add(MealPlan(user_id=user_id, week_start=monday))
            db.commit()
        except IntegrityError:
            # Another request created the same week first
            db.rollback()
            plan = plan_repo.get_for_week(user_id, monday)
            if plan is None:
                raise ConflictError(
                    f"Could not create plan for week {monday}", code="PLAN_CONFLICT"
                )
            return plan
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"plan_create_failed user_id={user_id} week_start={monday}")
            raise
        db.refresh(plan)
        logger.info(f"plan_created user_id={user_id} week_start={monday} plan_id={plan.plan_id}")
        return plan

    @staticmethod
    def list_entries(db: Session, plan_id: uuid.UUID) -> List[PlanEntry]:
        return PlanEntryRepository(db).list_for_plan(plan_id)

    @staticmethod
    def add_entry(
        db: Session,
        user_id: uuid.UUID,
        week_start: DateLike,
        day: int,
        meal_type: Union[MealType, str],
        recipe_id: Optional[uuid.UUID] = None,
        notes: Optional[str] = None,
    ) -> PlanEntry:
        """Insert an entry into a cell. An entry holds a recipe or a note, not both.

        Raises:
            ServiceValidationError: invalid day/meal type, or both recipe and notes
            NotFoundError: the recipe does not exist or belongs to someone else
        """
        day = _day(day)
        meal = _meal_type(meal_type)
        if notes is not None:
            notes = notes.strip() or None
        if recipe_id is not None and notes is not None:
            logger.warning(f"plan_entry_rejected user_id={user_id} reason=recipe_and_notes")
            raise ServiceValidationError(
                "An entry holds either a recipe or a note, not both",
                code="AMBIGUOUS_ENTRY",
            )
        if recipe_id is not None and not RecipeRepository(db).get_for_owner(user_id, recipe_id):
            raise NotFoundError(f"Recipe not found: {recipe_id}", code="RECIPE_NOT_FOUND")

        plan = PlannerService.get_or_create_plan(db, user_id, week_start)
        try:
            entry = PlanEntryRepository(db).add(
                PlanEntry(plan_id=plan.plan_id, day=day, meal_type=meal, recipe_id=recipe_id, notes=notes)
            )
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"plan_entry_add_failed plan_id={plan.plan_id} day={day} meal_type={meal.value}")
            raise
        db.refresh(entry)
        logger.info(
            f"plan_entry_added plan_id={plan.plan_id} entry_id={entry.entry_id} "
            f"day={day} meal_type={meal.value}"
        )
        return entry

    @staticmethod
    def remove_entry(
        db: Session, user_id: uuid.UUID, week_start: DateLike, entry_id: uuid.UUID
    ) -> None:
        plan = PlannerService.get_plan(db, user_id, week_start)
        entry_repo = PlanEntryRepository(db)
        entry = entry_repo.get_in_plan(plan.plan_id, entry_id) if plan else None
        if not entry:
            raise NotFoundError(f"Plan entry not found: {entry_id}", code="ENTRY_NOT_FOUND")
        try:
            entry_repo.delete(entry)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"plan_entry_remove_failed plan_id={plan.plan_id} entry_id={entry_id}")
            raise
        logger.info(f"plan_entry_removed plan_id={plan.plan_id} entry_id={entry_id}")

    @staticmethod
    def clear_cell(
        db: Session,
        user_id: uuid.UUID,
        week_start: DateLike,
        day: int,
        meal_type: Union[MealType, str],
    ) -> int:
        """Delete every entry in one cell; returns how many were removed."""
        day = _day(day)
        meal = _meal_type(meal_type)
        plan = PlannerService.get_plan(db, user_id, week_start)
        if not plan:
            return 0
        try:
            count = PlanEntryRepository(db).delete_cell(plan.plan_id, day, meal)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"plan_cell_clear_failed plan_id={plan.plan_id} day={day} meal_type={meal.value}")
            raise
        logger.info(
            f"plan_cell_cleared plan_id={plan.plan_id} day={day} meal_type={meal.value} count={count}"
        )
        return count

    @staticmethod
    def clear_week(db: Session, user_id: uuid.UUID, week_start: DateLike) -> int:
        plan = PlannerService.get_plan(db, user_id, week_start)
        if not plan:
            return 0
        try:
            count = PlanEntryRepository(db).delete_for_plan(plan.plan_id)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"plan_week_clear_failed plan_id={plan.plan_id}")
            raise
        logger.info(f"plan_week_cleared plan_id={plan.plan_id} count={count}")
        return count

    @staticmethod
    def week_view(db: Session, user_id: uuid.UUID, week_start: DateLike) -> WeekView:
        plan = PlannerService.get_or_create_plan(db, user_id, week_start)
        entries = PlannerService.list_entries(db, plan.plan_id)
        titles = RecipeRepository(db).titles_for(user_id, recipe_ids_in(entries))
        return WeekView(
            plan=plan,
            week_start=plan.week_start,
            entries=entries,
            titles=titles,
            grid=project(entries, titles),
        )

    @staticmethod
    def grocery_list(db: Session, user_id: uuid.UUID, week_start: DateLike) -> List[str]:
        """Deduplicated, sorted ingredient lines of every recipe planned that week"""
        plan = PlannerService.get_plan(db, user_id, week_start)
        if not plan:
            return []
        entries = PlannerService.list_entries(db, plan.plan_id)
        recipes = RecipeRepository(db).get_many(user_id, recipe_ids_in(entries))
        return aggregate(recipes)


class BoundPlanStore:
    """``PlannerService`` bound to one database session and user."""

    def __init__(self, db: Session, user_id: uuid.UUID):
        self.db = db
        self.user_id = user_id

    def fetch_entries(self, week_start: date) -> Sequence[PlanEntrySnapshot]:
        plan = PlannerService.get_or_create_plan(self.db, self.user_id, week_start)
        return [PlanEntrySnapshot.from_entry(e) for e in PlannerService.list_entries(self.db, plan.plan_id)]

    def recipe_titles(self, recipe_ids: Sequence[uuid.UUID]) -> Dict[uuid.UUID, str]:
        return RecipeRepository(self.db).titles_for(self.user_id, recipe_ids)

    def add_entry(self, week_start, day, meal_type, recipe_id=None, notes=None) -> None:
        PlannerService.add_entry(self.db, self.user_id, week_start, day, meal_type, recipe_id, notes)

    def remove_entry(self, week_start, entry_id) -> None:
        PlannerService.remove_entry(self.db, self.user_id, week_start, entry_id)

    def clear_cell(self, week_start, day, meal_type) -> int:
        return PlannerService.clear_cell(self.db, self.user_id, week_start, day, meal_type)

    def clear_week(self, week_start) -> int:
        return PlannerService.clear_week(self.db, self.user_id, week_start)

    def grocery_list(self, week_start) -> List[str]:
        return PlannerService.grocery_list(self.db, self.user_id, week_start)
