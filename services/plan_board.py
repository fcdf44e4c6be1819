"""
Planner page controller.

``PlanBoard`` keeps the presentation state of one user's planner (current
week, entry snapshot, projected grid, grocery checklist) and drives a
``PlanStore`` with a command-then-refresh protocol: every successful command
is followed by a re-fetch of the week; a failed command records ``error`` and
leaves the last good snapshot in place.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Mapping, Optional, Protocol, Sequence, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import ServiceValidationError
from domain.enums import MealType
from domain.week import DateLike, shift_week, start_of_week
from services.grocery import GroceryChecklist, recipe_ids_in
from services.session import Identity, SessionState, SessionStatus, SessionStore
from services.week_grid import PlanEntrySnapshot, WeekGrid, project

logger = logging.getLogger("mealgrid.plan_board")

_STORE_ERRORS = (ServiceValidationError, SQLAlchemyError)


class PlanStore(Protocol):
    def fetch_entries(self, week_start: date) -> Sequence[PlanEntrySnapshot]: ...

    def recipe_titles(self, recipe_ids: Sequence[UUID]) -> Mapping[UUID, str]: ...

    def add_entry(self, week_start: date, day: int, meal_type: MealType,
                  recipe_id: Optional[UUID] = None, notes: Optional[str] = None) -> None: ...

    def remove_entry(self, week_start: date, entry_id: UUID) -> None: ...

    def clear_cell(self, week_start: date, day: int, meal_type: MealType) -> int: ...

    def clear_week(self, week_start: date) -> int: ...

    def grocery_list(self, week_start: date) -> Sequence[str]: ...


class PlanBoard:
    def __init__(
        self,
        store_factory: Callable[[Identity], PlanStore],
        session: SessionStore,
        anchor: Optional[DateLike] = None,
    ):
        self._store_factory = store_factory
        self._store: Optional[PlanStore] = None
        self.week_start: date = start_of_week(anchor if anchor is not None else date.today())
        self.entries: Tuple[PlanEntrySnapshot, ...] = ()
        self.titles: Dict[UUID, str] = {}
        self.grid: WeekGrid = project(())
        self.error: Optional[str] = None
        self.loading = False
        self.checklist = GroceryChecklist()
        self.groceries_open = False
        self._unsubscribe = session.subscribe(self._on_session)
        self._on_session(session.state)

    def close(self) -> None:
        """Stop following the session"""
        self._unsubscribe()

    @property
    def signed_in(self) -> bool:
        return self._store is not None

    # ------------------ Session ------------------

    def _on_session(self, state: SessionState) -> None:
        if state.status is SessionStatus.UNKNOWN:
            self.loading = True
            return
        if state.is_signed_in:
            self._store = self._store_factory(state.identity)
            self.refresh()
            return
        self._store = None
        self.entries = ()
        self.titles = {}
        self.grid = project(())
        self.error = None
        self.loading = False
        self._reset_groceries()

    # ------------------ Queries ------------------

    def refresh(self) -> bool:
        """Re-fetch the current week and re-project the grid"""
        if self._store is None:
            return False
        self.loading = True
        try:
            entries = tuple(self._store.fetch_entries(self.week_start))
            titles = dict(self._store.recipe_titles(recipe_ids_in(entries)))
        except _STORE_ERRORS as exc:
            self.error = str(exc)
            logger.warning("plan_refresh_failed week_start=%s error=%s", self.week_start, exc)
            return False
        finally:
            self.loading = False
        self.entries = entries
        self.titles = titles
        self.grid = project(entries, titles)
        self.error = None
        return True

    # ------------------ Week navigation ------------------

    def go_to(self, anchor: DateLike) -> bool:
        """Show the week containing ``anchor``; on a failed load stay on the current week"""
        previous = self.week_start
        self.week_start = start_of_week(anchor)
        if self._store is None:
            self._reset_groceries()
            return False
        if not self.refresh():
            self.week_start = previous
            return False
        self._reset_groceries()
        return True

    def next_week(self) -> bool:
        return self.go_to(shift_week(self.week_start, 1))

    def previous_week(self) -> bool:
        return self.go_to(shift_week(self.week_start, -1))

    # ------------------ Commands ------------------

    def _run(self, command: str, action: Callable[[PlanStore], object]) -> bool:
        if self._store is None:
            self.error = "Please sign in to plan meals."
            return False
        try:
            action(self._store)
        except _STORE_ERRORS as exc:
            self.error = str(exc)
            logger.warning("plan_command_failed command=%s error=%s", command, exc)
            return False
        return self.refresh()

    def add_recipe(self, day: int, meal_type: MealType, recipe_id: UUID) -> bool:
        meal = MealType(meal_type)
        return self._run(
            "add_recipe",
            lambda store: store.add_entry(self.week_start, day, meal, recipe_id=recipe_id),
        )

    def add_note(self, day: int, meal_type: MealType, text: str) -> bool:
        note = (text or "").strip()
        if not note:
            self.error = "Please enter a note."
            return False
        meal = MealType(meal_type)
        return self._run(
            "add_note",
            lambda store: store.add_entry(self.week_start, day, meal, notes=note),
        )

    def remove_entry(self, entry_id: UUID) -> bool:
        return self._run("remove_entry", lambda store: store.remove_entry(self.week_start, entry_id))

    def clear_cell(self, day: int, meal_type: MealType) -> bool:
        meal = MealType(meal_type)
        return self._run(
            "clear_cell",
            lambda store: store.clear_cell(self.week_start, day, meal),
        )

    def clear_week(self) -> bool:
        return self._run("clear_week", lambda store: store.clear_week(self.week_start))

    # ------------------ Groceries ------------------

    def _reset_groceries(self) -> None:
        self.checklist.reset()
        self.groceries_open = False

    def open_grocery_list(self) -> bool:
        """Recompute the week's grocery list; nothing starts checked"""
        if self._store is None:
            self.error = "Please sign in to plan meals."
            return False
        try:
            items = list(self._store.grocery_list(self.week_start))
        except _STORE_ERRORS as exc:
            self.error = str(exc)
            logger.warning("grocery_list_failed week_start=%s error=%s", self.week_start, exc)
            return False
        self.checklist.reset(items)
        self.groceries_open = True
        return True

    def toggle_checked(self, line: str) -> bool:
        return self.checklist.toggle(line)

    def close_grocery_list(self) -> None:
        self.groceries_open = False
