"""
Grocery list aggregation and checked-state tracking.
"""

from __future__ import annotations

import unicodedata
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple
from uuid import UUID


def collation_key(text: str) -> Tuple[str, str]:
    """Accent- and case-insensitive sort key with the original text as tie-breaker"""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _ingredients_of(recipe: Any) -> Sequence[Any]:
    if isinstance(recipe, Mapping):
        lines = recipe.get("ingredients")
    else:
        lines = getattr(recipe, "ingredients", None)
    return lines or ()


def aggregate(recipes: Iterable[Any]) -> List[str]:
    """Merge the ingredient lines of ``recipes`` into one shopping list.

    Lines are trimmed and blanks dropped. Duplicates are detected
    case-insensitively and the first occurrence's casing is kept. The
    result is sorted for display.
    """
    seen: Set[str] = set()
    lines: List[str] = []
    for recipe in recipes:
        for raw in _ingredients_of(recipe):
            if raw is None:
                continue
            line = str(raw).strip()
            if not line:
                continue
            key = line.casefold()
            if key in seen:
                continue
            seen.add(key)
            lines.append(line)
    return sorted(lines, key=collation_key)


def recipe_ids_in(entries: Iterable[Any]) -> List[UUID]:
    """Distinct recipe ids referenced by ``entries``, first seen first"""
    ids = []
    for entry in entries:
        rid = entry.get("recipe_id") if isinstance(entry, Mapping) else getattr(entry, "recipe_id", None)
        if rid is not None and rid not in ids:
            ids.append(rid)
    return ids


class GroceryChecklist:
    """Which lines of the current grocery list have been ticked off.

    Purely in-memory; any recompute of the list starts from nothing checked.
    """

    def __init__(self, items: Optional[Iterable[str]] = None):
        self._items: Tuple[str, ...] = tuple(items or ())
        self._checked: Set[str] = set()

    @property
    def items(self) -> Tuple[str, ...]:
        return self._items

    @property
    def checked(self) -> FrozenSet[str]:
        return frozenset(self._checked)

    def is_checked(self, line: str) -> bool:
        return line in self._checked

    def toggle(self, line: str) -> bool:
        """Flip ``line`` and return its new state; unknown lines are ignored"""
        if line not in self._items:
            return False
        if line in self._checked:
            self._checked.discard(line)
            return False
        self._checked.add(line)
        return True

    def reset(self, items: Optional[Iterable[str]] = None) -> None:
        self._items = tuple(items or ())
        self._checked.clear()

    def __len__(self) -> int:
        return len(self._items)
