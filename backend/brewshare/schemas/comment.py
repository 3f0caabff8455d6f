"""Comment schemas"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class CommentCreate(BaseModel):
    """Schema for creating a comment; length rules are enforced by CommentService"""

    text: str


class CommentResponse(BaseModel):
    """Schema for comment response"""

    id: int
    review_id: int
    user_id: Optional[int] = None
    username: str
    text: str
    created_at: datetime

    class Config:
        from_attributes = True
