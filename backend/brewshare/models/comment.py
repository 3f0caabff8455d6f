"""Comment model"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index
from .base import Base, TimestampMixin


class Comment(Base, TimestampMixin):
    """Comment on a review.

    ``username`` is a snapshot of the author's name when the comment was
    written; renaming the author does not touch existing comments.
    """

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    username = Column(String(100), nullable=False)
    text = Column(Text, nullable=False)

    __table_args__ = (
        Index('ix_comment_review_created', 'review_id', 'created_at'),
    )

    def __repr__(self):
        return f"<Comment(id={self.id}, review_id={self.review_id}, user_id={self.user_id})>"
