"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.user import AppUser
from domain.models.recipe import Recipe
from domain.models.meal_plan import MealPlan, PlanEntry

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # User models
    "AppUser",
    # Recipe models
    "Recipe",
    # Meal plan models
    "MealPlan",
    "PlanEntry",
]
