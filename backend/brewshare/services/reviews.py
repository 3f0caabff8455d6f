"""Review management service"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..exceptions import NotFound
from ..models import Cheer, Comment, Review, User
from ..schemas.review import ReviewCreate, ReviewUpdate
from ..utils.logging import get_logger
from .authorization import ensure_owner_or_admin

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "style", "rating")


def purge_reviews(db: Session, *criteria) -> int:
    """
    Delete reviews matching criteria together with their cheers and comments

    Does not commit; runs inside the caller's transaction.

    Returns:
        Number of reviews deleted
    """

    review_ids = select(Review.id).where(*criteria)

    db.query(Cheer).filter(Cheer.review_id.in_(review_ids)).delete(synchronize_session=False)
    db.query(Comment).filter(Comment.review_id.in_(review_ids)).delete(synchronize_session=False)

    return db.query(Review).filter(*criteria).delete(synchronize_session=False)


class ReviewService:
    """CRUD orchestration for reviews"""

    def __init__(self, db: Session):
        self.db = db

    def create_review(self, owner: User, review: ReviewCreate) -> Review:
        """Create a review owned by the caller"""

        db_review = Review(**review.model_dump(), user_id=owner.id, cheers=0)
        self.db.add(db_review)
        self.db.commit()
        self.db.refresh(db_review)

        logger.info("Review created", review_id=db_review.id, user_id=owner.id)
        return db_review

    def list_reviews(
        self,
        skip: int = 0,
        limit: int = 100,
        user_id: Optional[int] = None
    ) -> List[Review]:
        """List reviews newest first, optionally for one owner"""

        query = self.db.query(Review)

        if user_id is not None:
            query = query.filter(Review.user_id == user_id)

        return (
            query.order_by(Review.created_at.desc(), Review.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_review(self, review_id: int) -> Review:
        review = self.db.get(Review, review_id)
        if review is None:
            raise NotFound("Review not found")
        return review

    def update_review(self, review_id: int, review_update: ReviewUpdate, actor: User) -> Review:
        """Update provided fields; owner or admin only"""

        review = self.get_review(review_id)
        ensure_owner_or_admin(actor, review.user_id, "Not authorized to modify this review")

        update_data = review_update.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            setattr(review, field, value)

        self.db.commit()
        self.db.refresh(review)

        logger.info("Review updated", review_id=review_id, user_id=actor.id)
        return review

    def delete_review(self, review_id: int, actor: User) -> None:
        """Delete a review with its cheers and comments; owner or admin only"""

        review = self.get_review(review_id)
        ensure_owner_or_admin(actor, review.user_id, "Not authorized to delete this review")

        purge_reviews(self.db, Review.id == review_id)
        self.db.commit()

        logger.info("Review deleted", review_id=review_id, user_id=actor.id)
