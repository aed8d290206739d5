import uuid
from collections.abc import Iterable

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from lets_api.core.constants import FOLLOW_STATUS_ACCEPTED, PRIVACY_PUBLIC
from lets_api.models.activity import Activity
from lets_api.models.activity_relations import ActivityInvitee, ActivityRsvp
from lets_api.models.comment import Comment
from lets_api.models.user_relations import UserFollower


class ActivityRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, activity_id: uuid.UUID) -> Activity | None:
        return self.db.scalar(select(Activity).where(Activity.id == activity_id))

    def get_many(self, activity_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, Activity]:
        ids = set(activity_ids)
        if not ids:
            return {}
        return {activity.id: activity for activity in self.db.scalars(select(Activity).where(Activity.id.in_(ids)))}

    def get_comment(self, comment_id: uuid.UUID) -> Comment | None:
        return self.db.scalar(select(Comment).where(Comment.id == comment_id))

    def get_comments(self, comment_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, Comment]:
        ids = set(comment_ids)
        if not ids:
            return {}
        return {comment.id: comment for comment in self.db.scalars(select(Comment).where(Comment.id.in_(ids)))}

    def is_invitee(self, activity_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        stmt = select(ActivityInvitee.id).where(
            ActivityInvitee.activity_id == activity_id,
            ActivityInvitee.invitee_id == user_id,
        )
        return self.db.scalar(stmt.limit(1)) is not None

    def is_accepted_follower(self, user_id: uuid.UUID, follower_id: uuid.UUID) -> bool:
        stmt = select(UserFollower.id).where(
            UserFollower.user_id == user_id,
            UserFollower.follower_id == follower_id,
            UserFollower.status == FOLLOW_STATUS_ACCEPTED,
        )
        return self.db.scalar(stmt.limit(1)) is not None

    def page_ids(self, stmt: Select, *, offset: int, limit: int) -> tuple[list[uuid.UUID], int]:
        """Page a ``select(Activity.id)`` statement by ``updated_at`` desc and count the full selection."""
        total = self.db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        paged = stmt.order_by(Activity.updated_at.desc(), Activity.id.desc()).offset(offset).limit(limit)
        return list(self.db.scalars(paged)), int(total)

    def public_ids_stmt(self) -> Select:
        return select(Activity.id).where(Activity.privacy == PRIVACY_PUBLIC)

    def authored_ids_stmt(self, author_id: uuid.UUID, *, ends_after: int | None = None) -> Select:
        stmt = select(Activity.id).where(Activity.author_id == author_id)
        if ends_after is not None:
            stmt = stmt.where(Activity.start + Activity.duration >= ends_after)
        return stmt

    def authored_or_rsvped_ids_stmt(self, user_id: uuid.UUID, *, ends_after: int) -> Select:
        rsvped = select(ActivityRsvp.activity_id).where(ActivityRsvp.user_id == user_id)
        return select(Activity.id).where(
            or_(Activity.author_id == user_id, Activity.id.in_(rsvped)),
            Activity.start + Activity.duration >= ends_after,
        )

    def authored_ids(self, author_id: uuid.UUID) -> list[uuid.UUID]:
        return list(self.db.scalars(self.authored_ids_stmt(author_id)))

    def photo_comment_ids(self, activity_ids: list[uuid.UUID]) -> list[uuid.UUID]:
        if not activity_ids:
            return []
        stmt = select(Comment.id).where(Comment.activity_id.in_(activity_ids), Comment.photos.is_not(None))
        return list(self.db.scalars(stmt))
