"""User management service: registration, credentials, profile and deletion"""

from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import Forbidden, NotFound, ValidationError
from ..models import Comment, Review, User
from ..schemas.user import UserCreate, UserUpdate
from ..utils.auth import get_password_hash, verify_password
from ..utils.logging import get_logger
from .authorization import ensure_owner_or_admin
from .engagement import EngagementLedger
from .relationships import RelationshipLedger
from .reviews import purge_reviews

logger = get_logger(__name__)


class UserService:
    """Credential store operations"""

    def __init__(self, db: Session):
        self.db = db

    def register(self, user: UserCreate) -> User:
        """
        Register a new user

        Raises:
            ValidationError: If the username or email is already taken
        """

        self._ensure_unique(username=user.username, email=user.email)

        db_user = User(
            username=user.username,
            email=user.email,
            date_of_birth=user.date_of_birth,
            profile_pic_url=user.profile_pic_url,
            password_hash=get_password_hash(user.password),
            is_admin=False
        )

        self.db.add(db_user)
        self._commit_unique()
        self.db.refresh(db_user)

        logger.info("User registered", user_id=db_user.id)
        return db_user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user for valid credentials, None otherwise"""

        user = self.db.query(User).filter(User.email == email).first()
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def list_users(self, skip: int = 0, limit: int = 100) -> List[User]:
        return self.db.query(User).order_by(User.id).offset(skip).limit(limit).all()

    def update_user(self, user_id: int, user_update: UserUpdate, actor: User) -> User:
        """
        Update profile fields; owner or admin only

        Only admins may change the admin flag, including their own.
        """

        user = self.get_user(user_id)
        ensure_owner_or_admin(actor, user.id, "Not authorized to modify this user")

        update_data = user_update.model_dump(exclude_unset=True)

        if update_data.get("is_admin") is not None and not actor.is_admin:
            raise Forbidden("Only admins can change admin status")

        self._ensure_unique(
            username=update_data.get("username"),
            email=update_data.get("email"),
            exclude_id=user.id
        )

        password = update_data.pop("password", None)
        if password:
            user.password_hash = get_password_hash(password)

        for field, value in update_data.items():
            if value is None and field in ("username", "email", "is_admin"):
                continue
            setattr(user, field, value)

        self._commit_unique()
        self.db.refresh(user)

        logger.info("User updated", user_id=user_id, actor_id=actor.id, fields=sorted(update_data))
        return user

    def delete_user(self, user_id: int, actor: User) -> Dict[str, int]:
        """
        Delete a user and everything that depends on it, in one transaction

        Owned reviews (with their cheers and comments) are removed, the
        user's cheers are withdrawn from other reviews, the user is scrubbed
        from every friend set, remaining comments keep their snapshot name
        but lose the author reference, and finally the user row goes.
        Any failure rolls the whole cascade back.

        Returns:
            Counts of deleted reviews and scrubbed friend sets
        """

        user = self.get_user(user_id)
        ensure_owner_or_admin(actor, user.id, "Not authorized to delete this user")
        actor_id = actor.id

        try:
            reviews_deleted = purge_reviews(self.db, Review.user_id == user_id)
            EngagementLedger(self.db).scrub_user(user_id)
            friend_links_removed = RelationshipLedger(self.db).scrub_user(user_id)

            self.db.query(Comment).filter(Comment.user_id == user_id).update(
                {Comment.user_id: None}, synchronize_session=False
            )
            self.db.query(User).filter(User.id == user_id).delete(synchronize_session=False)

            self.db.commit()

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("User deletion rolled back", user_id=user_id, error=str(e))
            raise

        self.db.expunge(user)

        logger.info(
            "User deleted",
            user_id=user_id,
            actor_id=actor_id,
            reviews_deleted=reviews_deleted,
            friend_links_removed=friend_links_removed
        )
        return {
            "reviews_deleted": reviews_deleted,
            "friend_links_removed": friend_links_removed,
        }

    def _ensure_unique(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        exclude_id: Optional[int] = None
    ) -> None:
        checks = (("username", User.username, username), ("email", User.email, email))

        for label, column, value in checks:
            if value is None:
                continue
            query = self.db.query(User).filter(column == value)
            if exclude_id is not None:
                query = query.filter(User.id != exclude_id)
            if query.first() is not None:
                raise ValidationError(f"{label.capitalize()} already exists")

    def _commit_unique(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError("Username or email already exists")
