"""Current user routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from api.auth import require_identity
from api.dependencies import get_db
from domain.schemas.user_schemas import UserProfileResponse
from services.session import Identity
from services.user_service import UserService

router = APIRouter(tags=["Users"])
logger = logging.getLogger("mealgrid.api.users")


@router.get("/me", response_model=UserProfileResponse)
def get_me(identity: Identity = Depends(require_identity), db: Session = Depends(get_db)):
    """Profile of the signed-in user; created on first sign-in."""
    return UserService.get_user(db, identity.user_id)
