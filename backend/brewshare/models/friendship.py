"""Friendship model"""

from sqlalchemy import Column, Integer, ForeignKey, DateTime
from .base import Base, utcnow


class Friendship(Base):
    """One directed friend link: friend_id is in user_id's friend set.

    The composite primary key makes the friend set duplicate-free.
    """

    __tablename__ = "friendships"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    friend_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Friendship(user_id={self.user_id}, friend_id={self.friend_id})>"
