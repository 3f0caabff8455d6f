"""Review and cheer schemas"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ReviewBase(BaseModel):
    """Base review schema"""

    name: str = Field(..., min_length=1, max_length=200)
    style: str = Field(..., min_length=1, max_length=100)
    rating: float = Field(..., ge=0, le=5)
    review_pic_url: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=255)


class ReviewCreate(ReviewBase):
    """Schema for creating a review; the owner is always the caller"""

    pass


class ReviewUpdate(BaseModel):
    """Schema for updating a review"""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    style: Optional[str] = Field(None, min_length=1, max_length=100)
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_pic_url: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=255)


class ReviewResponse(ReviewBase):
    """Schema for review response"""

    id: int
    user_id: int
    cheers: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CheerStatus(BaseModel):
    has_cheered: bool


class CheerToggleResponse(BaseModel):
    review: ReviewResponse
    has_cheered: bool


class Cheerer(BaseModel):
    user_id: int
    username: str
