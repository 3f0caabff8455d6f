"""Pydantic schemas for request/response validation"""

from .user import UserCreate, UserUpdate, UserResponse, UserPublic, UserDeleteResponse
from .auth import LoginRequest, LoginResponse, SessionUser, MessageResponse
from .review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    CheerStatus,
    CheerToggleResponse,
    Cheerer,
)
from .comment import CommentCreate, CommentResponse
from .friend import FriendRequest

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserPublic",
    "UserDeleteResponse",
    "LoginRequest",
    "LoginResponse",
    "SessionUser",
    "MessageResponse",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "CheerStatus",
    "CheerToggleResponse",
    "Cheerer",
    "CommentCreate",
    "CommentResponse",
    "FriendRequest",
]
