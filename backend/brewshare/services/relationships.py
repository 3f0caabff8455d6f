"""Relationship Ledger: friend set management"""

from typing import List

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import NotFound, ValidationError
from ..models import Friendship, User
from ..utils.logging import get_logger

logger = get_logger(__name__)


class RelationshipLedger:
    """
    Friend links between users

    Each call touches only the caller's own friend set: ``add_friend(a, b)``
    puts ``b`` into ``a``'s set and nothing else. Friend sets are
    duplicate-free through the composite primary key on ``friendships``.
    """

    def __init__(self, db: Session):
        self.db = db

    def add_friend(self, user_id: int, friend_id: int) -> bool:
        """
        Add friend_id to user_id's friend set

        Args:
            user_id: Owner of the friend set
            friend_id: User to add

        Returns:
            True if a link was created, False if it already existed

        Raises:
            ValidationError: If user_id == friend_id
            NotFound: If friend_id does not exist
        """

        if user_id == friend_id:
            raise ValidationError("Cannot add yourself as a friend")

        if self.db.get(User, friend_id) is None:
            raise NotFound("User not found")

        if self.is_friend(user_id, friend_id):
            return False

        self.db.add(Friendship(user_id=user_id, friend_id=friend_id))
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent add of the same link won the race
            self.db.rollback()
            return False

        logger.info("Friend added", user_id=user_id, friend_id=friend_id)
        return True

    def remove_friend(self, user_id: int, friend_id: int) -> bool:
        """
        Remove friend_id from user_id's friend set; absent links are fine

        Returns:
            True if a link was removed
        """

        removed = (
            self.db.query(Friendship)
            .filter(Friendship.user_id == user_id, Friendship.friend_id == friend_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()

        if removed:
            logger.info("Friend removed", user_id=user_id, friend_id=friend_id)

        return bool(removed)

    def is_friend(self, user_id: int, friend_id: int) -> bool:
        return (
            self.db.query(Friendship)
            .filter(Friendship.user_id == user_id, Friendship.friend_id == friend_id)
            .first()
        ) is not None

    def list_friends(self, user_id: int) -> List[User]:
        """
        Resolve user_id's friend set to user records

        Raises:
            NotFound: If user_id does not exist
        """

        if self.db.get(User, user_id) is None:
            raise NotFound("User not found")

        return (
            self.db.query(User)
            .join(Friendship, Friendship.friend_id == User.id)
            .filter(Friendship.user_id == user_id)
            .order_by(User.username)
            .all()
        )

    def scrub_user(self, user_id: int) -> int:
        """
        Drop every link that mentions user_id, in either direction

        Does not commit; runs inside the caller's transaction.

        Returns:
            Number of other users' friend sets the user was removed from
        """

        scrubbed = (
            self.db.query(Friendship)
            .filter(Friendship.friend_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.query(Friendship).filter(
            or_(Friendship.user_id == user_id, Friendship.friend_id == user_id)
        ).delete(synchronize_session=False)

        return scrubbed
