"""Friend API endpoints

Mutations always act on the caller's own friend set; the caller identity
comes from the session, never from the request body.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ..models import User
from ..schemas.auth import MessageResponse
from ..schemas.friend import FriendRequest
from ..schemas.user import UserPublic
from ..services.relationships import RelationshipLedger
from ..utils.database import get_db
from ..utils.dependencies import get_current_user
from ..utils.metrics import record_friend_link

router = APIRouter()


@router.get("/", response_model=List[UserPublic])
def list_my_friends(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List the caller's friends"""

    return RelationshipLedger(db).list_friends(current_user.id)


@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def add_friend(
    friend: FriendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Add a user to the caller's friends"""

    created = RelationshipLedger(db).add_friend(current_user.id, friend.friend_id)
    if created:
        record_friend_link("add")

    return MessageResponse(message="Friend added successfully")


@router.delete("/{friend_id}", response_model=MessageResponse)
def remove_friend(
    friend_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Remove a user from the caller's friends"""

    removed = RelationshipLedger(db).remove_friend(current_user.id, friend_id)
    if removed:
        record_friend_link("remove")

    return MessageResponse(message="Friend removed successfully")
