"""
Recipe Repository - owner-scoped recipe queries.
"""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Recipe


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access. Every query is scoped to an owner."""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def get_for_owner(self, owner_id: UUID, recipe_id: UUID) -> Optional[Recipe]:
        return (
            self.db.query(Recipe)
            .filter(Recipe.recipe_id == recipe_id, Recipe.owner_id == owner_id)
            .first()
        )

    def list_for_owner(self, owner_id: UUID, q: Optional[str] = None) -> List[Recipe]:
        """Newest first, optionally filtered by a case-insensitive title substring"""
        query = self.db.query(Recipe).filter(Recipe.owner_id == owner_id)
        if q and q.strip():
            query = query.filter(Recipe.title.ilike(_like_pattern(q.strip()), escape="\\"))
        return query.order_by(Recipe.created_at.desc(), Recipe.title).all()

    def get_many(self, owner_id: UUID, recipe_ids: Iterable[UUID]) -> List[Recipe]:
        """Owned recipes among ``recipe_ids``, in the order the ids were given"""
        ids = list(dict.fromkeys(recipe_ids))
        if not ids:
            return []
        rows = (
            self.db.query(Recipe)
            .filter(Recipe.owner_id == owner_id, Recipe.recipe_id.in_(ids))
            .all()
        )
        by_id = {r.recipe_id: r for r in rows}
        return [by_id[i] for i in ids if i in by_id]

    def titles_for(self, owner_id: UUID, recipe_ids: Iterable[UUID]) -> Dict[UUID, str]:
        ids = list(dict.fromkeys(recipe_ids))
        if not ids:
            return {}
        rows = (
            self.db.query(Recipe.recipe_id, Recipe.title)
            .filter(Recipe.owner_id == owner_id, Recipe.recipe_id.in_(ids))
            .all()
        )
        return {rid: title for rid, title in rows}
