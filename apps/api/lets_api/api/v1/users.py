from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lets_api.api.deps import get_current_user, page_criteria
from lets_api.db.session import get_db
from lets_api.models.user import User
from lets_api.schemas.feed import FeedPage
from lets_api.schemas.user import FollowState, UserFollowStatePage
from lets_api.services.feed_service import FeedService
from lets_api.services.follow_state import FollowStateService
from lets_api.services.social_service import SocialService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/feeds", response_model=FeedPage)
def get_profile_feeds(
    user_id: UUID,
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FeedService(db).get_profile_feeds(current_user.id, user_id, criteria)


@router.get("/{user_id}/feeds/upcoming", response_model=FeedPage)
def get_upcoming_feeds(
    user_id: UUID,
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FeedService(db).get_upcoming_feeds(current_user.id, user_id, criteria)


@router.get("/{user_id}/follow-state", response_model=FollowState)
def get_follow_state(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FollowStateService(db).compute_single_user_follow_state(current_user.id, user_id)


@router.get("/{user_id}/followers", response_model=UserFollowStatePage)
def get_user_followers(
    user_id: UUID,
    status: int | None = Query(default=None, ge=0, le=2),
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).get_user_followers(current_user.id, user_id, {**criteria, "status": status})


@router.get("/{user_id}/followings", response_model=UserFollowStatePage)
def get_user_followings(
    user_id: UUID,
    status: int | None = Query(default=None, ge=0, le=2),
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).get_user_followings(current_user.id, user_id, {**criteria, "status": status})
