from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lets_api.api.deps import get_current_user, page_criteria
from lets_api.db.session import get_db
from lets_api.models.user import User
from lets_api.schemas.feed import FeedPage
from lets_api.services.feed_service import FeedService

router = APIRouter(prefix="/feeds", tags=["feeds"])


@router.get("/public", response_model=FeedPage)
def get_public_feeds(
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FeedService(db).get_public_feeds(current_user.id, criteria)


@router.get("/me", response_model=FeedPage)
def get_my_feeds(
    criteria: dict = Depends(page_criteria),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FeedService(db).get_my_feeds(current_user.id, criteria)
