"""
Typed partial updates.

A ``Patch`` tells apart a field that was left alone from one that was
explicitly cleared, so an update never has to guess what a missing key or a
``None`` value meant.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import Any, Generic, List, Optional, TypeVar

from app.exceptions import ServiceValidationError

T = TypeVar("T")


class PatchState(str, enum.Enum):
    UNCHANGED = "unchanged"
    SET = "set"
    CLEARED = "cleared"


@dataclass(frozen=True)
class Patch(Generic[T]):
    state: PatchState = PatchState.UNCHANGED
    value: Optional[T] = None

    @classmethod
    def unchanged(cls) -> "Patch[T]":
        return cls(PatchState.UNCHANGED)

    @classmethod
    def set(cls, value: T) -> "Patch[T]":
        return cls(PatchState.SET, value)

    @classmethod
    def clear(cls) -> "Patch[T]":
        return cls(PatchState.CLEARED)

    @property
    def is_unchanged(self) -> bool:
        return self.state is PatchState.UNCHANGED

    def apply_to(self, current: Optional[T]) -> Optional[T]:
        """Return the field value after applying this patch to ``current``."""
        if self.state is PatchState.SET:
            return self.value
        if self.state is PatchState.CLEARED:
            return None
        return current


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class RecipePatch:
    """Edits to a recipe; every field defaults to unchanged."""

    title: Patch[str] = field(default_factory=Patch.unchanged)
    description: Patch[str] = field(default_factory=Patch.unchanged)
    cook_time_min: Patch[int] = field(default_factory=Patch.unchanged)
    tags: Patch[List[str]] = field(default_factory=Patch.unchanged)
    source_urls: Patch[List[str]] = field(default_factory=Patch.unchanged)
    ingredients: Patch[List[str]] = field(default_factory=Patch.unchanged)

    def __post_init__(self):
        if self.title.state is PatchState.CLEARED:
            raise ServiceValidationError("Recipe title cannot be cleared", code="TITLE_REQUIRED")

    @classmethod
    def from_values(cls, values: dict) -> "RecipePatch":
        """Build a patch from already-normalized values.

        Keys absent from ``values`` stay unchanged; ``None``, blank strings and
        empty lists clear the field.
        """
        patches = {}
        for f in fields(cls):
            if f.name not in values:
                continue
            value = values[f.name]
            patches[f.name] = Patch.clear() if _is_blank(value) else Patch.set(value)
        return cls(**patches)

    def changed_fields(self) -> List[str]:
        return [f.name for f in fields(self) if not getattr(self, f.name).is_unchanged]

    def apply(self, target: Any) -> List[str]:
        """Apply every touched field to ``target`` (an ORM row); return their names."""
        changed = self.changed_fields()
        for name in changed:
            patch = getattr(self, name)
            setattr(target, name, patch.apply_to(getattr(target, name)))
        return changed
