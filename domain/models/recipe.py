"""
Recipe model.
"""

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, JSON, UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base, utcnow


class Recipe(Base):
    """A user's recipe with optional photo and freeform ingredient lines"""

    __tablename__ = "recipe"

    recipe_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(
        UUID(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(Text, nullable=False)
    description = Column(Text)
    cook_time_min = Column(Integer)
    tags = Column(JSON)  # list[str] or NULL
    source_urls = Column(JSON)  # list[str] or NULL
    ingredients = Column(JSON)  # list[str] or NULL, one line per item
    image_path = Column(Text)  # key inside the storage bucket
    image_url = Column(Text)  # last resolved display URL
    created_at = Column(
        TIMESTAMP(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner = relationship("AppUser", back_populates="recipes")
