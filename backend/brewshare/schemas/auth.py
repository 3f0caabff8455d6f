"""Authentication schemas"""

from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    """Login request schema"""

    email: EmailStr
    password: str


class SessionUser(BaseModel):
    """Identity summary returned on login"""

    id: int
    email: EmailStr
    username: str

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Login response schema; the token itself travels in the cookie"""

    success: bool = True
    user: SessionUser


class MessageResponse(BaseModel):
    message: str
