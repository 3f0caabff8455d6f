"""Comment API endpoints, nested under a review"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ..models import User
from ..schemas.auth import MessageResponse
from ..schemas.comment import CommentCreate, CommentResponse
from ..services.comments import CommentService
from ..utils.database import get_db
from ..utils.dependencies import get_current_user
from ..utils.metrics import record_comment

router = APIRouter()


@router.get("/{review_id}/comments", response_model=List[CommentResponse])
def list_comments(review_id: int, db: Session = Depends(get_db)):
    """List comments on a review, newest first"""

    return CommentService(db).list_comments(review_id)


@router.post(
    "/{review_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED
)
def add_comment(
    review_id: int,
    comment: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Comment on a review"""

    created = CommentService(db).create_comment(review_id, current_user, comment.text)
    record_comment()
    return created


@router.delete("/{review_id}/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(
    review_id: int,
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a comment (author or admin)"""

    CommentService(db).delete_comment(review_id, comment_id, current_user)
    return MessageResponse(message="Comment deleted")
