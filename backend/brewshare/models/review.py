"""Review and cheer models"""

from sqlalchemy import Column, Integer, Float, String, ForeignKey, DateTime
from .base import Base, TimestampMixin, utcnow


class Review(Base, TimestampMixin):
    """Beer review table"""

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    style = Column(String(100), nullable=False)
    rating = Column(Float, nullable=False, default=0.0)
    review_pic_url = Column(String(500))
    location = Column(String(255))
    cheers = Column(Integer, nullable=False, default=0)  # always equals the number of Cheer rows

    def __repr__(self):
        return f"<Review(id={self.id}, name='{self.name}', cheers={self.cheers})>"


class Cheer(Base):
    """Membership of a user in a review's cheerer set"""

    __tablename__ = "review_cheers"

    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Cheer(review_id={self.review_id}, user_id={self.user_id})>"
