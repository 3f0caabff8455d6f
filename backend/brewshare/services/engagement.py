"""Engagement Ledger: per-review cheer sets"""

from typing import Dict, List, Tuple, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import NotFound
from ..models import Cheer, Review, User
from ..utils.logging import get_logger

logger = get_logger(__name__)


class EngagementLedger:
    """
    Cheers on reviews

    The cheerer set lives in ``review_cheers`` and ``reviews.cheers`` is
    its size. Both change in the same transaction, and the count is only
    ever moved by a single ``cheers = cheers +/- 1`` statement keyed on
    whether the membership row was actually inserted or deleted.
    """

    def __init__(self, db: Session):
        self.db = db

    def toggle_cheer(self, review_id: int, user_id: int) -> Tuple[Review, bool]:
        """
        Flip user_id's cheer on a review

        Args:
            review_id: Review ID
            user_id: Cheering user

        Returns:
            (updated review, whether the user now cheers it)

        Raises:
            NotFound: If the review does not exist
        """

        review = self.db.get(Review, review_id)
        if review is None:
            raise NotFound("Review not found")

        try:
            removed = self._withdraw(review_id, user_id)

            if removed:
                self._adjust_count(review_id, -1)
                cheered = False
            else:
                self.db.add(Cheer(review_id=review_id, user_id=user_id))
                self.db.flush()
                self._adjust_count(review_id, 1)
                cheered = True

            self.db.commit()

        except IntegrityError:
            # A concurrent toggle inserted the same cheer first; keep its effect
            self.db.rollback()
            cheered = True

        self.db.refresh(review)

        logger.info(
            "Cheer toggled",
            review_id=review_id,
            user_id=user_id,
            cheered=cheered,
            cheers=review.cheers
        )
        return review, cheered

    def has_cheered(self, review_id: int, user_id: int) -> bool:
        return (
            self.db.query(Cheer)
            .filter(Cheer.review_id == review_id, Cheer.user_id == user_id)
            .first()
        ) is not None

    def list_cheerers(self, review_id: int) -> List[Dict[str, Union[int, str]]]:
        """
        Resolve a review's cheerer set to display names, oldest cheer first
        """

        rows = (
            self.db.query(User.id, User.username)
            .join(Cheer, Cheer.user_id == User.id)
            .filter(Cheer.review_id == review_id)
            .order_by(Cheer.created_at, User.id)
            .all()
        )

        return [{"user_id": user_id, "username": username} for user_id, username in rows]

    def scrub_user(self, user_id: int) -> None:
        """
        Withdraw all of user_id's cheers, decrementing each affected count

        Does not commit; runs inside the caller's transaction.
        """

        cheered_reviews = select(Cheer.review_id).where(Cheer.user_id == user_id)

        self.db.query(Review).filter(Review.id.in_(cheered_reviews)).update(
            {Review.cheers: Review.cheers - 1}, synchronize_session=False
        )
        self.db.query(Cheer).filter(Cheer.user_id == user_id).delete(synchronize_session=False)

    def _withdraw(self, review_id: int, user_id: int) -> int:
        return (
            self.db.query(Cheer)
            .filter(Cheer.review_id == review_id, Cheer.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def _adjust_count(self, review_id: int, delta: int) -> None:
        self.db.query(Review).filter(Review.id == review_id).update(
            {Review.cheers: Review.cheers + delta}, synchronize_session=False
        )
