"""
Domain layer - ORM models, schemas, enums and week/patch value types.
"""

from domain import enums, models, patch, schemas, week

__all__ = ["enums", "models", "patch", "schemas", "week"]
