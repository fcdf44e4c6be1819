"""
User Repository - Data access layer for user-related operations
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import AppUser


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email"""
        return self.db.query(AppUser).filter(AppUser.email == email).first()

    def upsert(
        self, user_id: UUID, email: Optional[str], full_name: Optional[str]
    ) -> AppUser:
        """Create the user row or refresh its email/name; empty values never overwrite"""
        user = self.get_by_id(user_id)
        if user is None:
            return self.add(AppUser(user_id=user_id, email=email, full_name=full_name))
        if email and user.email != email:
            user.email = email
        if full_name and user.full_name != full_name:
            user.full_name = full_name
        self.db.flush()
        return user
