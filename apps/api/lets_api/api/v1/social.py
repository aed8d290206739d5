from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lets_api.api.deps import get_current_user
from lets_api.db.session import get_db
from lets_api.models.user import User
from lets_api.schemas.user import FollowState
from lets_api.services.social_service import SocialService

router = APIRouter(prefix="/users", tags=["social"])


@router.post("/{user_id}/followings/{target_id}", response_model=FollowState)
def follow_user(
    user_id: UUID,
    target_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).follow_user(viewer_id=current_user.id, user_id=user_id, target_id=target_id)


@router.delete("/{user_id}/followings/{target_id}", response_model=FollowState)
def unfollow_user(
    user_id: UUID,
    target_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).unfollow_user(viewer_id=current_user.id, user_id=user_id, target_id=target_id)


@router.post("/{user_id}/followers/{follower_id}/approve", response_model=FollowState)
def approve_follower(
    user_id: UUID,
    follower_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).approve_follower(viewer_id=current_user.id, user_id=user_id, follower_id=follower_id)


@router.post("/{user_id}/followers/{follower_id}/reject", response_model=FollowState)
def reject_follower(
    user_id: UUID,
    follower_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).reject_follower(viewer_id=current_user.id, user_id=user_id, follower_id=follower_id)


@router.post("/{user_id}/blocks/{target_id}", response_model=FollowState)
def block_user(
    user_id: UUID,
    target_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).block_user(viewer_id=current_user.id, user_id=user_id, target_id=target_id)


@router.delete("/{user_id}/blocks/{target_id}", response_model=FollowState)
def unblock_user(
    user_id: UUID,
    target_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).unblock_user(viewer_id=current_user.id, user_id=user_id, target_id=target_id)
