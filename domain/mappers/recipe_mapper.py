"""
Recipe mappers.
Turn Recipe ORM rows into response DTOs with a freshly resolved image URL.
"""

from typing import Optional

from domain.models import Recipe
from domain.schemas.recipe_schemas import RecipeResponse, RecipeSummary


class RecipeMapper:
    @staticmethod
    def to_response(recipe: Recipe, image_url: Optional[str] = None) -> RecipeResponse:
        response = RecipeResponse.model_validate(recipe)
        if image_url is not None:
            response.image_url = image_url
        return response

    @staticmethod
    def to_summary(recipe: Recipe, image_url: Optional[str] = None) -> RecipeSummary:
        summary = RecipeSummary.model_validate(recipe)
        if image_url is not None:
            summary.image_url = image_url
        return summary
