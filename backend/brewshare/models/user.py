"""User model"""

from sqlalchemy import Column, Integer, String, Boolean, Date
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """User table for credentials and profile data"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    date_of_birth = Column(Date)
    profile_pic_url = Column(String(500))
    is_admin = Column(Boolean, default=False, nullable=False)

    # Read-only view of the friend set; mutations go through RelationshipLedger
    friendships = relationship(
        "Friendship",
        foreign_keys="Friendship.user_id",
        viewonly=True,
        lazy="selectin",
    )

    @property
    def friend_ids(self):
        return sorted(f.friend_id for f in self.friendships)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
