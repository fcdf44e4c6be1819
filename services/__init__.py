"""Services package - Business logic layer"""

from services.user_service import UserService
from services.recipe_service import RecipeService
from services.planner_service import PlannerService, BoundPlanStore, WeekView
from services.plan_board import PlanBoard, PlanStore
from services.session import Identity, SessionState, SessionStatus, SessionStore

# week_grid and grocery hold pure functions, not service classes

__all__ = [
    "UserService",
    "RecipeService",
    "PlannerService",
    "BoundPlanStore",
    "WeekView",
    "PlanBoard",
    "PlanStore",
    "Identity",
    "SessionState",
    "SessionStatus",
    "SessionStore",
]
