"""
Domain enums for MealGrid application.
Contains all enumeration types used across the domain models.
"""

import enum


class MealType(str, enum.Enum):
    """Meal slots of a planned day, in display order"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


MEAL_TYPES = tuple(MealType)

DAYS_PER_WEEK = 7
