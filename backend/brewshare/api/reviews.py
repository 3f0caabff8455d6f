"""Review and cheer API endpoints"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from ..models import User
from ..schemas.auth import MessageResponse
from ..schemas.review import (
    Cheerer,
    CheerStatus,
    CheerToggleResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewUpdate,
)
from ..services.engagement import EngagementLedger
from ..services.reviews import ReviewService
from ..utils.database import get_db
from ..utils.dependencies import get_current_user
from ..utils.metrics import record_cheer_toggle

router = APIRouter()


@router.post("/", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    review: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a review owned by the caller"""

    return ReviewService(db).create_review(current_user, review)


@router.get("/", response_model=List[ReviewResponse])
def list_reviews(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    user_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """List reviews, newest first, with optional owner filter"""

    return ReviewService(db).list_reviews(skip=skip, limit=limit, user_id=user_id)


@router.get("/{review_id}", response_model=ReviewResponse)
def get_review(review_id: int, db: Session = Depends(get_db)):
    """Get a specific review"""

    return ReviewService(db).get_review(review_id)


@router.put("/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: int,
    review_update: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update a review (owner or admin)"""

    return ReviewService(db).update_review(review_id, review_update, current_user)


@router.delete("/{review_id}", response_model=MessageResponse)
def delete_review(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a review (owner or admin)"""

    ReviewService(db).delete_review(review_id, current_user)
    return MessageResponse(message="Review deleted successfully")


@router.get("/{review_id}/cheer", response_model=CheerStatus)
def get_cheer_status(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Whether the caller has cheered a review"""

    ReviewService(db).get_review(review_id)
    return CheerStatus(has_cheered=EngagementLedger(db).has_cheered(review_id, current_user.id))


@router.post("/{review_id}/cheer", response_model=CheerToggleResponse)
def toggle_cheer(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Toggle the caller's cheer on a review"""

    review, has_cheered = EngagementLedger(db).toggle_cheer(review_id, current_user.id)
    record_cheer_toggle(has_cheered)

    return CheerToggleResponse(
        review=ReviewResponse.model_validate(review),
        has_cheered=has_cheered
    )


@router.get("/{review_id}/cheerers", response_model=List[Cheerer])
def list_cheerers(review_id: int, db: Session = Depends(get_db)):
    """List the users who cheered a review"""

    ReviewService(db).get_review(review_id)
    return EngagementLedger(db).list_cheerers(review_id)
