"""Domain services"""

from .users import UserService
from .reviews import ReviewService
from .relationships import RelationshipLedger
from .engagement import EngagementLedger
from .comments import CommentService
from .images import ImageStorage
from .revocation import TokenRevocationList

__all__ = [
    "UserService",
    "ReviewService",
    "RelationshipLedger",
    "EngagementLedger",
    "CommentService",
    "ImageStorage",
    "TokenRevocationList",
]
