"""Database models"""

from .user import User
from .friendship import Friendship
from .review import Review, Cheer
from .comment import Comment

__all__ = [
    "User",
    "Friendship",
    "Review",
    "Cheer",
    "Comment",
]
