"""
API dependencies for dependency injection
"""

from typing import Generator
from sqlalchemy.orm import Session

from adapters.storage_adapter import LocalObjectStorage, get_storage as _default_storage
from domain.models import get_db_session


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_storage() -> LocalObjectStorage:
    """Object storage dependency; tests override it with a temporary bucket"""
    return _default_storage()
