from typing import Optional
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError
from domain.models import AppUser
from repositories import UserRepository
from services.session import Identity

logger = logging.getLogger("mealgrid.users")


class UserService:
    """Profiles are created lazily from the identity provider's claims"""

    @staticmethod
    def ensure_user(db: Session, identity: Identity) -> AppUser:
        """Upsert the ``app_user`` row for a signed-in identity.

        Raises:
            ConflictError: if the email already belongs to another user
        """
        user_repo = UserRepository(db)
        try:
            user = user_repo.upsert(identity.user_id, identity.email, identity.full_name)
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                f"user_upsert_conflict user_id={identity.user_id} email={identity.email}"
            )
            raise ConflictError(
                "Email is already registered to another account",
                code="EMAIL_TAKEN",
                details={"email": identity.email},
            )
        db.refresh(user)
        return user

    @staticmethod
    def get_user(db: Session, user_id: UUID) -> AppUser:
        user: Optional[AppUser] = UserRepository(db).get_by_id(user_id)
        if not user:
            logger.warning(f"user_not_found user_id={user_id}")
            raise NotFoundError(f"User not found: {user_id}")
        return user
