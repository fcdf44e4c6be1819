"""Bearer-token authentication against the external identity provider.

Access tokens are HS256 JWTs signed with the provider's shared secret. The
``sub`` claim is the user id; ``email`` and ``user_metadata.full_name`` (or
``name``) seed the profile row.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from api.dependencies import get_db
from app.config import settings
from app.exceptions import UnauthorizedError
from services.session import Identity, SessionState
from services.user_service import UserService

logger = logging.getLogger("mealgrid.auth")

bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and validate a JWT access token"""
    options = {} if settings.jwt_audience else {"verify_aud": False}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience or None,
            options=options,
        )
    except JWTError as exc:
        logger.info(f"token_rejected error={exc}")
        raise UnauthorizedError("Invalid or expired token", code="INVALID_TOKEN")


def identity_from_claims(claims: Dict[str, Any]) -> Identity:
    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError:
        raise UnauthorizedError("Invalid token payload", code="INVALID_TOKEN")
    metadata = claims.get("user_metadata") or {}
    full_name: Optional[str] = metadata.get("full_name") or metadata.get("name")
    return Identity(user_id=user_id, email=claims.get("email"), full_name=full_name)


def get_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> SessionState:
    """Session for the current request; no credentials means signed out"""
    if credentials is None or not credentials.credentials:
        return SessionState.signed_out()
    claims = decode_access_token(credentials.credentials)
    return SessionState.signed_in(identity_from_claims(claims))


def require_identity(
    session: SessionState = Depends(get_session),
    db: Session = Depends(get_db),
) -> Identity:
    """Login gate: rejects anonymous requests and makes sure the profile row exists"""
    if not session.is_signed_in:
        raise UnauthorizedError("Please sign in to continue", code="NOT_SIGNED_IN")
    UserService.ensure_user(db, session.identity)
    return session.identity
