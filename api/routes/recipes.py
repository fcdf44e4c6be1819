"""
Recipe routes - the signed-in user's recipe box.
"""

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from adapters.storage_adapter import LocalObjectStorage
from api.auth import require_identity
from api.dependencies import get_db, get_storage
from api.responses import success_response
from domain.mappers import RecipeMapper
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeResponse,
    RecipeSummary,
    RecipeUpdate,
)
from services.recipe_service import RecipeService
from services.session import Identity

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("mealgrid.api.recipes")


@router.get("", response_model=List[RecipeSummary])
def list_recipes(
    q: Optional[str] = Query(default=None, description="Case-insensitive title filter"),
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
):
    """List the user's recipes, newest first."""
    recipes = RecipeService.list_recipes(db, identity.user_id, q)
    return [
        RecipeMapper.to_summary(r, RecipeService.resolve_image_url(storage, r))
        for r in recipes
    ]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    body: RecipeCreate,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """
    Create a recipe.

    - **tags**: list or comma-separated text (first 12 kept)
    - **source_urls**: list or newline/comma-separated text (first 12 kept)
    - **ingredients**: list or one ingredient per line
    """
    recipe = RecipeService.create_recipe(db, identity.user_id, body)
    return RecipeMapper.to_response(recipe)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: UUID,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
):
    recipe = RecipeService.get_recipe(db, identity.user_id, recipe_id)
    return RecipeMapper.to_response(recipe, RecipeService.resolve_image_url(storage, recipe))


@router.patch("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: UUID,
    body: RecipeUpdate,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
):
    """Partial update. Omitted fields are kept; ``null`` or empty values clear them."""
    recipe = RecipeService.update_recipe(db, identity.user_id, recipe_id, body.to_patch())
    return RecipeMapper.to_response(recipe, RecipeService.resolve_image_url(storage, recipe))


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: UUID,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
):
    """Delete a recipe and its photo. Plan entries pointing at it are kept."""
    RecipeService.delete_recipe(db, storage, identity.user_id, recipe_id)
    return success_response({"recipe_id": str(recipe_id)}, "Recipe deleted")


@router.put("/{recipe_id}/image", response_model=RecipeResponse)
def upload_recipe_image(
    recipe_id: UUID,
    file: UploadFile = File(..., description="Image file (image/*)"),
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
):
    content = file.file.read()
    recipe = RecipeService.set_image(
        db, storage, identity.user_id, recipe_id, file.filename, content, file.content_type
    )
    return RecipeMapper.to_response(recipe)


@router.delete("/{recipe_id}/image", response_model=RecipeResponse)
def delete_recipe_image(
    recipe_id: UUID,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
):
    recipe = RecipeService.remove_image(db, storage, identity.user_id, recipe_id)
    return RecipeMapper.to_response(recipe)
