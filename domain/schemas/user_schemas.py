from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class UserProfileResponse(BaseModel):
    user_id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
