"""User schemas"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import date, datetime


class UserBase(BaseModel):
    """Base user schema"""

    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    date_of_birth: Optional[date] = None
    profile_pic_url: Optional[str] = Field(None, max_length=500)


class UserCreate(UserBase):
    """Schema for registering a user"""

    password: str = Field(..., min_length=6, max_length=72)


class UserUpdate(BaseModel):
    """Schema for updating a user; omitted fields are left untouched"""

    username: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    date_of_birth: Optional[date] = None
    profile_pic_url: Optional[str] = Field(None, max_length=500)
    password: Optional[str] = Field(None, min_length=6, max_length=72)
    is_admin: Optional[bool] = None


class UserResponse(UserBase):
    """Full user record, only served to authenticated callers"""

    id: int
    is_admin: bool
    friend_ids: List[int] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserPublic(BaseModel):
    """Public profile summary"""

    id: int
    username: str
    profile_pic_url: Optional[str] = None

    class Config:
        from_attributes = True


class UserDeleteResponse(BaseModel):
    """Outcome of the user deletion cascade"""

    message: str
    reviews_deleted: int
    friend_links_removed: int
