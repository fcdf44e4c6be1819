"""
Meal planning models.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    ForeignKey,
    Date,
    Integer,
    UUID,
    CheckConstraint,
    UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.enums import MealType
from domain.models.database import Base, utcnow


class MealPlan(Base):
    """Weekly meal plan, one per user and Monday"""

    __tablename__ = "meal_plan"
    __table_args__ = (
        UniqueConstraint("user_id", "week_start", name="uq_meal_plan_user_week"),
    )

    plan_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    week_start = Column(Date, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    user = relationship("AppUser", back_populates="meal_plans")
    entries = relationship(
        "PlanEntry",
        back_populates="plan",
        cascade="all, delete-orphan",
    )


class PlanEntry(Base):
    """A recipe or note assigned to one (day, meal type) cell of a week"""

    __tablename__ = "plan_entry"
    __table_args__ = (
        CheckConstraint("day >= 0 AND day <= 6", name="ck_plan_entry_day"),
    )

    entry_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    plan_id = Column(
        UUID(as_uuid=True),
        ForeignKey("meal_plan.plan_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day = Column(Integer, nullable=False)  # 0 = Monday .. 6 = Sunday
    meal_type = Column(
        SQLEnum(MealType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    recipe_id = Column(UUID(as_uuid=True))  # no FK: recipe deletes do not cascade
    notes = Column(Text)
    position = Column(Integer, nullable=False)  # insertion order within the plan
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)

    plan = relationship("MealPlan", back_populates="entries")
