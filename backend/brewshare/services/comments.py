"""Comment service"""

from typing import List

from sqlalchemy.orm import Session

from ..config import settings
from ..exceptions import NotFound, ValidationError
from ..models import Comment, Review, User
from ..utils.logging import get_logger
from .authorization import ensure_owner_or_admin

logger = get_logger(__name__)


class CommentService:
    """
    Comments on reviews

    The author's username is copied onto the comment when it is written.
    Later renames do not propagate to existing comments, and a comment
    keeps its name after the author account is deleted.
    """

    def __init__(self, db: Session):
        self.db = db
        self.max_length = settings.COMMENT_MAX_LENGTH

    def list_comments(self, review_id: int) -> List[Comment]:
        """List a review's comments, newest first"""

        self._ensure_review(review_id)

        return (
            self.db.query(Comment)
            .filter(Comment.review_id == review_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )

    def create_comment(self, review_id: int, author: User, text: str) -> Comment:
        """
        Add a comment

        Args:
            review_id: Review ID
            author: Commenting user
            text: Comment body, stored trimmed

        Raises:
            ValidationError: If text is blank or longer than COMMENT_MAX_LENGTH
            NotFound: If the review does not exist
        """

        trimmed = (text or "").strip()
        if not trimmed:
            raise ValidationError("Comment text is required")
        if len(trimmed) > self.max_length:
            raise ValidationError(f"Comment text too long (max {self.max_length} chars)")

        self._ensure_review(review_id)

        comment = Comment(
            review_id=review_id,
            user_id=author.id,
            username=author.username,
            text=trimmed
        )
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)

        logger.info("Comment created", comment_id=comment.id, review_id=review_id, user_id=author.id)
        return comment

    def delete_comment(self, review_id: int, comment_id: int, requester: User) -> None:
        """
        Delete a comment; author or admin only

        Raises:
            NotFound: If the comment does not exist on this review
            Forbidden: If requester is neither the author nor an admin
        """

        comment = (
            self.db.query(Comment)
            .filter(Comment.id == comment_id, Comment.review_id == review_id)
            .first()
        )
        if comment is None:
            raise NotFound("Comment not found")

        ensure_owner_or_admin(requester, comment.user_id, "Not authorized to delete this comment")

        self.db.delete(comment)
        self.db.commit()

        logger.info("Comment deleted", comment_id=comment_id, review_id=review_id, user_id=requester.id)

    def _ensure_review(self, review_id: int) -> None:
        if self.db.get(Review, review_id) is None:
            raise NotFound("Review not found")
