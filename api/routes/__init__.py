"""API routes package"""

from . import health, users, recipes, plans, storage

__all__ = ["health", "users", "recipes", "plans", "storage"]
