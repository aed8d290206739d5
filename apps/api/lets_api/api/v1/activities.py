from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lets_api.api.deps import get_current_user, page_criteria
from lets_api.db.session import get_db
from lets_api.models.user import User
from lets_api.schemas.activity import ActivityDetail, CommentDetailPage
from lets_api.schemas.user import UserPage
from lets_api.services.activity_service import ActivityService

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("/{activity_id}", response_model=ActivityDetail)
def get_activity_detail(
    activity_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ActivityService(db).get_activity_detail(current_user.id, activity_id)


@router.get("/{activity_id}/comments", response_model=CommentDetailPage)
def get_comments(
    activity_id: UUID,
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ActivityService(db).get_comments(current_user.id, activity_id, criteria)


@router.get("/{activity_id}/likes", response_model=UserPage)
def get_likes(
    activity_id: UUID,
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ActivityService(db).get_likes(current_user.id, activity_id, criteria)


@router.get("/{activity_id}/comments/{comment_id}/comments", response_model=CommentDetailPage)
def get_comment_replies(
    activity_id: UUID,
    comment_id: UUID,
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ActivityService(db).get_comment_replies(current_user.id, activity_id, comment_id, criteria)


@router.get("/{activity_id}/comments/{comment_id}/likes", response_model=UserPage)
def get_comment_likes(
    activity_id: UUID,
    comment_id: UUID,
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ActivityService(db).get_comment_likes(current_user.id, activity_id, comment_id, criteria)
