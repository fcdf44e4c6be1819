"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.recipe_repository import RecipeRepository
from repositories.meal_plan_repository import MealPlanRepository, PlanEntryRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RecipeRepository",
    "MealPlanRepository",
    "PlanEntryRepository",
]
