"""User API endpoints"""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import List

from ..models import User
from ..schemas.user import UserDeleteResponse, UserPublic, UserResponse, UserUpdate
from ..services.relationships import RelationshipLedger
from ..services.users import UserService
from ..utils.auth import clear_session_cookie
from ..utils.database import get_db
from ..utils.dependencies import get_current_user
from ..utils.metrics import record_user_deleted

router = APIRouter()


@router.get("/", response_model=List[UserResponse])
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List all users"""

    return UserService(db).list_users(skip=skip, limit=limit)


@router.get("/{user_id}/public", response_model=UserPublic)
def get_public_user(user_id: int, db: Session = Depends(get_db)):
    """Get a user's public profile summary"""

    return UserService(db).get_user(user_id)


@router.get("/{user_id}/friends", response_model=List[UserPublic])
def get_user_friends(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List a user's friends"""

    return RelationshipLedger(db).list_friends(user_id)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a user's full record"""

    return UserService(db).get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update a user (owner or admin)"""

    return UserService(db).update_user(user_id, user_update, current_user)


@router.delete("/{user_id}", response_model=UserDeleteResponse)
def delete_user(
    user_id: int,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Delete a user (owner or admin)

    Also deletes the user's reviews and removes the user from every
    friend list. Deleting your own account clears the session cookie.
    """

    deleting_self = current_user.id == user_id
    result = UserService(db).delete_user(user_id, current_user)
    record_user_deleted()

    if deleting_self:
        clear_session_cookie(response)

    return UserDeleteResponse(message="User deleted successfully", **result)
