"""Builds the nested read views of activities and photo comments.

Every relation is loaded once per page with an ``IN (...)`` query, and user
lists are annotated with the viewer's follow state in one batch at the end.
Ids that no longer resolve to a row are skipped; callers that need existence
or privacy guarantees check them before resolving.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from lets_api.core.config import settings
from lets_api.models.activity import Activity
from lets_api.models.activity_relations import ActivityLike, ActivityPhoto, ActivityRsvp
from lets_api.models.comment import Comment, CommentLike
from lets_api.models.user import User
from lets_api.repositories.activity_repo import ActivityRepository
from lets_api.repositories.relation_repo import RelationRepository
from lets_api.repositories.user_repo import UserRepository
from lets_api.schemas.activity import (
    ActivityDetail,
    ActivityFields,
    ActivityRecord,
    CommentDetail,
    CommentList,
    CommentView,
    CountSummary,
    InteractionRecord,
    ParentActivity,
    PhotoList,
    PhotoRecord,
)
from lets_api.schemas.user import UserList, UserSummary
from lets_api.services.follow_state import FollowStateService

logger = logging.getLogger(__name__)

MAX_PARENT_DEPTH = 1
_ROOT_COMMENTS = (Comment.parent_id.is_(None),)
_COMMENT_FIELDS = ("id", "activity_id", "author_id", "text", "photos", "parent_id", "created_at", "updated_at")


class ActivityDetailResolver:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.activity_repo = ActivityRepository(db)
        self.relation_repo = RelationRepository(db)
        self.user_repo = UserRepository(db)
        self.follow_state_service = FollowStateService(db)

    def resolve_activities(
        self,
        viewer_id: UUID,
        activity_ids: Sequence[UUID],
        *,
        depth: int = MAX_PARENT_DEPTH,
    ) -> list[ActivityDetail]:
        activities = self.activity_repo.get_many(activity_ids)
        ordered = [activities[activity_id] for activity_id in activity_ids if activity_id in activities]
        if not ordered:
            return []
        ids = [activity.id for activity in ordered]

        likes = self.relation_repo.latest_per_parent(
            ActivityLike, ActivityLike.activity_id, ids, limit=settings.activity_latest_likes
        )
        like_totals = self.relation_repo.count_per_parent(ActivityLike.activity_id, ids)
        rsvps = self.relation_repo.latest_per_parent(
            ActivityRsvp, ActivityRsvp.activity_id, ids, limit=settings.activity_latest_rsvp
        )
        rsvp_totals = self.relation_repo.count_per_parent(ActivityRsvp.activity_id, ids)
        photos = self.relation_repo.latest_per_parent(
            ActivityPhoto, ActivityPhoto.activity_id, ids, limit=settings.activity_latest_photos
        )
        photo_totals = self.relation_repo.count_per_parent(ActivityPhoto.activity_id, ids)
        comments = self.relation_repo.latest_per_parent(
            Comment, Comment.activity_id, ids, limit=settings.activity_latest_comments, where=_ROOT_COMMENTS
        )
        comment_totals = self.relation_repo.count_per_parent(Comment.activity_id, ids, where=_ROOT_COMMENTS)

        own_likes = self.relation_repo.owned_by_user(ActivityLike, ActivityLike.activity_id, ids, user_id=viewer_id)
        own_rsvps = self.relation_repo.owned_by_user(ActivityRsvp, ActivityRsvp.activity_id, ids, user_id=viewer_id)
        comment_ids = [comment.id for rows in comments.values() for comment in rows]
        own_comment_likes = self.relation_repo.owned_by_user(
            CommentLike, CommentLike.comment_id, comment_ids, user_id=viewer_id
        )

        parents: dict[UUID, ParentActivity] = {}
        if min(depth, MAX_PARENT_DEPTH) > 0:
            parents = self._resolve_parents({activity.parent_id for activity in ordered if activity.parent_id})

        users = self.user_repo.get_many(
            [activity.author_id for activity in ordered]
            + [row.user_id for rows in likes.values() for row in rows]
            + [row.user_id for rows in rsvps.values() for row in rows]
            + [comment.author_id for rows in comments.values() for comment in rows]
        )

        annotated: list[UserSummary] = []
        details: list[ActivityDetail] = []
        for activity in ordered:
            like_users = _summaries(users, (row.user_id for row in likes.get(activity.id, [])))
            rsvp_users = _summaries(users, (row.user_id for row in rsvps.get(activity.id, [])))
            annotated.extend(like_users)
            annotated.extend(rsvp_users)
            details.append(
                ActivityDetail(
                    **_activity_fields(activity),
                    rsvp=UserList(items=rsvp_users, total=rsvp_totals.get(activity.id, 0)),
                    likes=UserList(items=like_users, total=like_totals.get(activity.id, 0)),
                    photos=PhotoList(
                        items=[PhotoRecord.model_validate(photo) for photo in photos.get(activity.id, [])],
                        total=photo_totals.get(activity.id, 0),
                    ),
                    comments=CommentList(
                        items=[
                            _comment_view(comment, users, own_comment_likes)
                            for comment in comments.get(activity.id, [])
                        ],
                        total=comment_totals.get(activity.id, 0),
                    ),
                    author=_summary(users, activity.author_id),
                    parent=parents.get(activity.parent_id) if activity.parent_id else None,
                    current_user_rsvp=_interaction(own_rsvps.get(activity.id)),
                    current_user_like=_interaction(own_likes.get(activity.id)),
                )
            )

        self.follow_state_service.annotate(viewer_id, annotated)
        logger.debug("resolved activities", extra={"viewer_id": str(viewer_id), "count": len(details)})
        return details

    def resolve_comments(
        self,
        viewer_id: UUID,
        comment_ids: Sequence[UUID],
        *,
        with_replies: bool = True,
    ) -> list[CommentDetail]:
        comments = self.activity_repo.get_comments(comment_ids)
        ordered = [comments[comment_id] for comment_id in comment_ids if comment_id in comments]
        if not ordered:
            return []
        ids = [comment.id for comment in ordered]

        activities = self.activity_repo.get_many(comment.activity_id for comment in ordered)
        likes = self.relation_repo.latest_per_parent(
            CommentLike, CommentLike.comment_id, ids, limit=settings.activity_latest_likes
        )
        like_totals = self.relation_repo.count_per_parent(CommentLike.comment_id, ids)

        replies: dict[UUID, list[Comment]] = {}
        reply_totals: dict[UUID, int] = {}
        if with_replies:
            replies = self.relation_repo.latest_per_parent(
                Comment, Comment.parent_id, ids, limit=settings.activity_latest_comments
            )
            reply_totals = self.relation_repo.count_per_parent(Comment.parent_id, ids)
        reply_ids = [reply.id for rows in replies.values() for reply in rows]
        own_likes = self.relation_repo.owned_by_user(
            CommentLike, CommentLike.comment_id, ids + reply_ids, user_id=viewer_id
        )

        users = self.user_repo.get_many(
            [comment.author_id for comment in ordered]
            + [row.user_id for rows in likes.values() for row in rows]
            + [reply.author_id for rows in replies.values() for reply in rows]
        )

        annotated: list[UserSummary] = []
        details: list[CommentDetail] = []
        for comment in ordered:
            like_users = _summaries(users, (row.user_id for row in likes.get(comment.id, [])))
            annotated.extend(like_users)
            activity = activities.get(comment.activity_id)
            reply_list = None
            if with_replies:
                reply_list = CommentList(
                    items=[_comment_view(reply, users, own_likes) for reply in replies.get(comment.id, [])],
                    total=reply_totals.get(comment.id, 0),
                )
            details.append(
                CommentDetail(
                    **_comment_view(comment, users, own_likes).model_dump(),
                    activity=ActivityRecord.model_validate(activity) if activity else None,
                    likes=UserList(items=like_users, total=like_totals.get(comment.id, 0)),
                    comments=reply_list,
                )
            )

        self.follow_state_service.annotate(viewer_id, annotated)
        return details

    def _resolve_parents(self, parent_ids: Iterable[UUID]) -> dict[UUID, ParentActivity]:
        parents = self.activity_repo.get_many(parent_ids)
        if not parents:
            return {}
        ids = list(parents)
        rsvp_totals = self.relation_repo.count_per_parent(ActivityRsvp.activity_id, ids)
        authors = self.user_repo.get_many(parent.author_id for parent in parents.values())
        return {
            parent.id: ParentActivity(
                **ActivityRecord.model_validate(parent).model_dump(),
                rsvp=CountSummary(total=rsvp_totals.get(parent.id, 0)),
                author=_summary(authors, parent.author_id),
            )
            for parent in parents.values()
        }


def _activity_fields(activity: Activity) -> dict:
    return ActivityFields.model_validate(activity).model_dump()


def _summary(users: dict[UUID, User], user_id: UUID) -> UserSummary | None:
    user = users.get(user_id)
    return UserSummary.model_validate(user) if user else None


def _summaries(users: dict[UUID, User], user_ids: Iterable[UUID]) -> list[UserSummary]:
    # rows whose user is gone are dropped, like an inner join
    return [UserSummary.model_validate(users[user_id]) for user_id in user_ids if user_id in users]


def _interaction(record: ActivityLike | ActivityRsvp | CommentLike | None) -> InteractionRecord | None:
    return InteractionRecord.model_validate(record) if record else None


def _comment_view(comment: Comment, users: dict[UUID, User], own_likes: dict[UUID, CommentLike]) -> CommentView:
    return CommentView(
        **{field: getattr(comment, field) for field in _COMMENT_FIELDS},
        author=_summary(users, comment.author_id),
        current_user_like=_interaction(own_likes.get(comment.id)),
    )
