"""Friend schemas"""

from pydantic import BaseModel


class FriendRequest(BaseModel):
    """Schema for adding a friend to the caller's friend set"""

    friend_id: int
