#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the MealGrid schema in the database named by MEALGRID_DATABASE_URL.
"""

import logging
import os
import sys

# Ensure we're using the right Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from domain.models import init_database

logger = logging.getLogger("mealgrid.scripts.init_db")


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()), format=settings.log_format
    )
    logger.info("Initializing MealGrid schema (sqlite=%s)", settings.is_sqlite())
    try:
        init_database()
    except SQLAlchemyError as exc:
        logger.error("Schema creation failed: %s", exc)
        return 1
    logger.info("Tables ready: app_user, recipe, meal_plan, plan_entry")
    return 0


if __name__ == "__main__":
    sys.exit(main())
