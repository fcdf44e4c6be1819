"""
Week grid projection.

Turns the flat list of a week's plan entries into the 7 x 4 grid of
(day, meal type) cells the planner renders. The projection is pure: it never
touches the database and never mutates its input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from uuid import UUID

from domain.enums import DAYS_PER_WEEK, MEAL_TYPES, MealType

logger = logging.getLogger("mealgrid.week_grid")

RECIPE_PLACEHOLDER = "Recipe"
ITEM_PLACEHOLDER = "Item"

TitleLookup = Union[Mapping[Any, str], Callable[[Any], Optional[str]], None]
CellKey = Tuple[int, MealType]


@dataclass(frozen=True)
class PlanEntrySnapshot:
    """Detached, read-only copy of a plan entry"""

    entry_id: Optional[UUID]
    day: int
    meal_type: MealType
    recipe_id: Optional[UUID] = None
    notes: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: Any) -> "PlanEntrySnapshot":
        return cls(
            entry_id=_read(entry, "entry_id"),
            day=_read(entry, "day"),
            meal_type=MealType(_read(entry, "meal_type")),
            recipe_id=_read(entry, "recipe_id"),
            notes=_read(entry, "notes"),
        )


@dataclass(frozen=True)
class GridItem:
    entry_id: Optional[UUID]
    day: int
    meal_type: MealType
    recipe_id: Optional[UUID]
    notes: Optional[str]
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "day": self.day,
            "meal_type": self.meal_type.value,
            "recipe_id": self.recipe_id,
            "notes": self.notes,
            "label": self.label,
        }


@dataclass(frozen=True)
class WeekGrid:
    """All 28 cells of a week, each holding its items in supplied order."""

    cells: Dict[CellKey, Tuple[GridItem, ...]]

    def cell(self, day: int, meal_type: Union[MealType, str]) -> Tuple[GridItem, ...]:
        return self.cells.get((day, MealType(meal_type)), ())

    def rows(self) -> List[Tuple[MealType, List[Tuple[GridItem, ...]]]]:
        """Meal-type-major rows: one row per meal type, one column per day."""
        return [
            (meal, [self.cells[(day, meal)] for day in range(DAYS_PER_WEEK)])
            for meal in MEAL_TYPES
        ]

    def items(self) -> List[GridItem]:
        return [item for _, row in self.rows() for cell in row for item in cell]

    def is_empty(self) -> bool:
        return not any(self.cells.values())

    def to_dict(self) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
        return {
            meal.value: {
                str(day): [item.to_dict() for item in self.cells[(day, meal)]]
                for day in range(DAYS_PER_WEEK)
            }
            for meal in MEAL_TYPES
        }


def _read(entry: Any, name: str, default: Any = None) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name, default)
    return getattr(entry, name, default)


def _lookup_title(titles: TitleLookup, recipe_id: Any) -> Optional[str]:
    if titles is None:
        return None
    if callable(titles) and not isinstance(titles, Mapping):
        return titles(recipe_id)
    title = titles.get(recipe_id)
    if title is None and recipe_id is not None:
        title = titles.get(str(recipe_id))
    return title


def label_for(recipe_id: Any, notes: Optional[str], titles: TitleLookup = None) -> str:
    """Display label of one entry.

    A recipe reference wins over notes; an unresolved reference shows the
    recipe placeholder rather than falling back to the notes.
    """
    if recipe_id is not None:
        return _lookup_title(titles, recipe_id) or RECIPE_PLACEHOLDER
    if notes is not None and notes.strip():
        return notes
    return ITEM_PLACEHOLDER


def empty_cells() -> Dict[CellKey, Tuple[GridItem, ...]]:
    return {(day, meal): () for day in range(DAYS_PER_WEEK) for meal in MEAL_TYPES}


def project(entries: Iterable[Any], titles: TitleLookup = None) -> WeekGrid:
    """Project entries into a ``WeekGrid``.

    Args:
        entries: plan entries in display order (ORM rows, dicts or snapshots)
        titles: recipe id -> title mapping or callable; may be partial

    Entries whose day or meal type fall outside the grid are skipped.
    """
    buckets: Dict[CellKey, List[GridItem]] = {key: [] for key in empty_cells()}
    for entry in entries:
        day = _read(entry, "day")
        try:
            meal = MealType(_read(entry, "meal_type"))
        except ValueError:
            meal = None
        if meal is None or not isinstance(day, int) or not 0 <= day < DAYS_PER_WEEK:
            logger.warning(
                "grid_entry_skipped entry_id=%s day=%r meal_type=%r",
                _read(entry, "entry_id"),
                day,
                _read(entry, "meal_type"),
            )
            continue
        recipe_id = _read(entry, "recipe_id")
        notes = _read(entry, "notes")
        buckets[(day, meal)].append(
            GridItem(
                entry_id=_read(entry, "entry_id"),
                day=day,
                meal_type=meal,
                recipe_id=recipe_id,
                notes=notes,
                label=label_for(recipe_id, notes, titles),
            )
        )
    return WeekGrid(cells={key: tuple(items) for key, items in buckets.items()})
