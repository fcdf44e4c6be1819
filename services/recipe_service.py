"""
Recipe management: CRUD, photo upload and display URL resolution.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from adapters.storage_adapter import LocalObjectStorage, StorageError
from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Recipe
from domain.patch import RecipePatch
from domain.schemas.recipe_schemas import RecipeCreate
from repositories import RecipeRepository

logger = logging.getLogger("mealgrid.recipes")

DEFAULT_IMAGE_EXTENSION = "jpg"
_EXTENSION = re.compile(r"^[a-z0-9]{1,10}$")


def image_extension(filename: Optional[str]) -> str:
    """Lower-cased extension of ``filename``, ``jpg`` when there is none usable"""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].strip().lower()
        if _EXTENSION.match(ext):
            return ext
    return DEFAULT_IMAGE_EXTENSION


def _discard(storage: LocalObjectStorage, path: str) -> None:
    try:
        storage.remove([path])
    except StorageError as exc:
        logger.warning(f"image_remove_failed path={path} error={exc}")


class RecipeService:
    @staticmethod
    def list_recipes(db: Session, owner_id: uuid.UUID, q: Optional[str] = None) -> List[Recipe]:
        return RecipeRepository(db).list_for_owner(owner_id, q)

    @staticmethod
    def get_recipe(db: Session, owner_id: uuid.UUID, recipe_id: uuid.UUID) -> Recipe:
        recipe = RecipeRepository(db).get_for_owner(owner_id, recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe not found: {recipe_id}", code="RECIPE_NOT_FOUND")
        return recipe

    @staticmethod
    def create_recipe(db: Session, owner_id: uuid.UUID, data: RecipeCreate) -> Recipe:
        recipe = Recipe(
            owner_id=owner_id,
            title=data.title.strip(),
            description=data.description,
            cook_time_min=data.cook_time_min,
            tags=data.tags or None,
            source_urls=data.source_urls or None,
            ingredients=data.ingredients or None,
        )
        try:
            RecipeRepository(db).add(recipe)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"recipe_create_failed owner_id={owner_id}")
            raise
        db.refresh(recipe)
        logger.info(f"recipe_created owner_id={owner_id} recipe_id={recipe.recipe_id}")
        return recipe

    @staticmethod
    def update_recipe(
        db: Session, owner_id: uuid.UUID, recipe_id: uuid.UUID, patch: RecipePatch
    ) -> Recipe:
        recipe = RecipeService.get_recipe(db, owner_id, recipe_id)
        changed = patch.apply(recipe)
        if not changed:
            return recipe
        if recipe.title is None or not recipe.title.strip():
            db.rollback()
            raise ServiceValidationError("Please enter a title.", code="TITLE_REQUIRED")
        db.commit()
        db.refresh(recipe)
        logger.info(f"recipe_updated recipe_id={recipe_id} fields={','.join(changed)}")
        return recipe

    @staticmethod
    def delete_recipe(
        db: Session, storage: LocalObjectStorage, owner_id: uuid.UUID, recipe_id: uuid.UUID
    ) -> None:
        """Delete the recipe row, then its stored photo.

        Plan entries that reference the recipe are left in place and render
        with a placeholder label.
        """
        recipe = RecipeService.get_recipe(db, owner_id, recipe_id)
        image_path = recipe.image_path
        RecipeRepository(db).delete(recipe)
        db.commit()
        logger.info(f"recipe_deleted owner_id={owner_id} recipe_id={recipe_id}")
        if image_path:
            _discard(storage, image_path)

    # ------------------ Images ------------------

    @staticmethod
    def resolve_image_url(storage: LocalObjectStorage, recipe: Recipe) -> Optional[str]:
        """Signed URL for the recipe photo, else its public URL, else the stored URL"""
        if not recipe.image_path:
            return recipe.image_url
        try:
            return storage.create_signed_url(recipe.image_path, settings.signed_url_ttl_sec)
        except StorageError as exc:
            logger.warning(f"signed_url_failed path={recipe.image_path} error={exc}")
        try:
            return storage.get_public_url(recipe.image_path) or recipe.image_url
        except StorageError:
            return recipe.image_url

    @staticmethod
    def set_image(
        db: Session,
        storage: LocalObjectStorage,
        owner_id: uuid.UUID,
        recipe_id: uuid.UUID,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str],
    ) -> Recipe:
        """Upload a new photo and swap it in; the previous photo is removed afterwards."""
        if not content_type or not content_type.startswith("image/"):
            raise ServiceValidationError(
                "Please choose an image file.",
                code="INVALID_IMAGE",
                details={"content_type": content_type},
            )
        if not content:
            raise ServiceValidationError("Image file is empty", code="INVALID_IMAGE")

        recipe = RecipeService.get_recipe(db, owner_id, recipe_id)
        previous_path = recipe.image_path
        new_path = f"{owner_id}/{uuid.uuid4()}.{image_extension(filename)}"
        try:
            storage.upload(new_path, content, content_type)
        except StorageError as exc:
            raise ServiceValidationError(f"Image upload failed: {exc}", code="UPLOAD_FAILED")

        try:
            recipe.image_path = new_path
            recipe.image_url = RecipeService.resolve_image_url(storage, recipe)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            _discard(storage, new_path)
            logger.exception(f"recipe_image_update_failed recipe_id={recipe_id}")
            raise
        db.refresh(recipe)
        logger.info(f"recipe_image_set recipe_id={recipe_id} path={new_path}")

        if previous_path and previous_path != new_path:
            _discard(storage, previous_path)
        return recipe

    @staticmethod
    def remove_image(
        db: Session, storage: LocalObjectStorage, owner_id: uuid.UUID, recipe_id: uuid.UUID
    ) -> Recipe:
        recipe = RecipeService.get_recipe(db, owner_id, recipe_id)
        image_path = recipe.image_path
        if not image_path and not recipe.image_url:
            return recipe
        recipe.image_path = None
        recipe.image_url = None
        db.commit()
        db.refresh(recipe)
        logger.info(f"recipe_image_removed recipe_id={recipe_id}")
        if image_path:
            _discard(storage, image_path)
        return recipe
