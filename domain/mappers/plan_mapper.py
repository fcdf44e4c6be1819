"""
Plan mappers.
Handles transformation of a projected week into its API representation.
"""

from domain.enums import MEAL_TYPES
from domain.schemas.plan_schemas import GridItemResponse, WeekViewResponse
from domain.week import shift_week, week_days, week_end


class PlanMapper:
    """Mapper for week view transformations."""

    @staticmethod
    def to_week_view(view) -> WeekViewResponse:
        """
        Convert a ``services.planner_service.WeekView`` to its response DTO.

        The grid is keyed by meal type, then by day index (``"0"`` = Monday),
        and every one of the 28 cells is present even when empty.
        """
        grid = {
            meal.value: {
                str(day): [
                    GridItemResponse(
                        entry_id=item.entry_id,
                        day=item.day,
                        meal_type=item.meal_type,
                        recipe_id=item.recipe_id,
                        notes=item.notes,
                        label=item.label,
                    )
                    for item in cell
                ]
                for day, cell in enumerate(row)
            }
            for meal, row in view.grid.rows()
        }
        return WeekViewResponse(
            plan_id=view.plan.plan_id,
            week_start=view.week_start,
            week_end=week_end(view.week_start),
            previous_week=shift_week(view.week_start, -1),
            next_week=shift_week(view.week_start, 1),
            days=week_days(view.week_start),
            meal_types=list(MEAL_TYPES),
            grid=grid,
            entry_count=len(view.entries),
        )
