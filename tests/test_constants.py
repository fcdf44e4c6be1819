"""
Realistic test constants for the MealGrid test suite.

Recipes are written the way people actually type them into the recipe form:
freeform ingredient lines with inconsistent casing and stray whitespace.
"""

from datetime import date

# =============================================================================
# WEEKS
# =============================================================================

# 2024-03-11 is a Monday
MONDAY = date(2024, 3, 11)
WEDNESDAY = date(2024, 3, 13)
SUNDAY = date(2024, 3, 17)
NEXT_MONDAY = date(2024, 3, 18)
PREVIOUS_MONDAY = date(2024, 3, 4)

# =============================================================================
# RECIPES
# =============================================================================

REALISTIC_RECIPES = {
    "carbonara": {
        "title": "Spaghetti Carbonara",
        "description": "Roman classic, no cream.",
        "cook_time_min": 25,
        "tags": "pasta, italian, quick",
        "source_urls": "https://example.com/carbonara\nhttps://example.com/guanciale",
        "ingredients": "200 g spaghetti\n100 g guanciale\n2 eggs\n  Pecorino Romano  \n\nblack pepper",
    },
    "shakshuka": {
        "title": "Shakshuka",
        "description": "Eggs poached in spiced tomato sauce.",
        "cook_time_min": 30,
        "tags": ["breakfast", "vegetarian"],
        "source_urls": None,
        "ingredients": ["4 eggs", "1 can tomatoes", "1 onion", "Black Pepper", "cumin"],
    },
    "overnight_oats": {
        "title": "Overnight Oats",
        "description": None,
        "cook_time_min": 5,
        "tags": "breakfast",
        "source_urls": None,
        "ingredients": ["rolled oats", "milk", "honey"],
    },
}

GRID_NOTES = ["Leftovers", "Eat out", "Pizza night"]
