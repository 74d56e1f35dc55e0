"""Schemas for reviews."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.user import UserOut


class ReviewCreate(BaseModel):
    comment: Optional[str] = Field(None, description="Review text, 10-1000 characters")


class ReviewOut(BaseModel):
    id: int
    comment: str
    restaurant_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReviewDetail(ReviewOut):
    user: UserOut
