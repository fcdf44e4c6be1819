"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeUpdate,
    RecipeSummary,
    RecipeResponse,
)
from domain.schemas.plan_schemas import (
    PlanEntryCreate,
    GridItemResponse,
    WeekViewResponse,
    GroceryListResponse,
)
from domain.schemas.user_schemas import UserProfileResponse

__all__ = [
    # Recipe schemas
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeSummary",
    "RecipeResponse",
    # Plan schemas
    "PlanEntryCreate",
    "GridItemResponse",
    "WeekViewResponse",
    "GroceryListResponse",
    # User schemas
    "UserProfileResponse",
]
