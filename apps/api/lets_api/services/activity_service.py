from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from lets_api.core.constants import PRIVACY_PRIVATE, PRIVACY_SHARED
from lets_api.core.errors import (
    PRIVATE_ACTIVITY_ILLEGAL_ACCESS,
    SHARED_ACTIVITY_ILLEGAL_ACCESS,
    NotFoundError,
    PermissionDeniedError,
)
from lets_api.core.pagination import decorate_with_paginated_response, parse_limit_and_offset
from lets_api.models.activity import Activity
from lets_api.models.activity_relations import ActivityLike
from lets_api.models.comment import Comment, CommentLike
from lets_api.repositories.activity_repo import ActivityRepository
from lets_api.repositories.relation_repo import RelationRepository
from lets_api.repositories.user_repo import UserRepository
from lets_api.schemas.activity import ActivityDetail
from lets_api.schemas.user import UserSummary
from lets_api.services.activity_detail import ActivityDetailResolver

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.activity_repo = ActivityRepository(db)
        self.relation_repo = RelationRepository(db)
        self.user_repo = UserRepository(db)
        self.resolver = ActivityDetailResolver(db)

    def get_activity_detail(self, viewer_id: UUID, activity_id: UUID) -> ActivityDetail:
        activity = self._validate_privacy_access(activity_id, viewer_id)
        details = self.resolver.resolve_activities(viewer_id, [activity.id])
        if not details:
            raise NotFoundError(f"activity {activity_id} not found")
        return details[0]

    def get_comments(
        self,
        viewer_id: UUID,
        activity_id: UUID,
        criteria: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        activity = self._validate_privacy_access(activity_id, viewer_id)
        lo = parse_limit_and_offset(criteria)
        comments, total = self.relation_repo.page_for_parent(
            Comment,
            Comment.activity_id,
            activity.id,
            offset=lo.offset,
            limit=lo.limit,
            where=(Comment.parent_id.is_(None),),
        )
        items = self.resolver.resolve_comments(viewer_id, [comment.id for comment in comments], with_replies=False)
        return decorate_with_paginated_response(items, lo, total)

    def get_likes(
        self,
        viewer_id: UUID,
        activity_id: UUID,
        criteria: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        activity = self._validate_privacy_access(activity_id, viewer_id)
        lo = parse_limit_and_offset(criteria)
        likes, total = self.relation_repo.page_for_parent(
            ActivityLike, ActivityLike.activity_id, activity.id, offset=lo.offset, limit=lo.limit
        )
        return decorate_with_paginated_response(self._users_of(likes), lo, total)

    def get_comment_replies(
        self,
        viewer_id: UUID,
        activity_id: UUID,
        comment_id: UUID,
        criteria: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        activity = self._validate_privacy_access(activity_id, viewer_id)
        comment = self._validate_comment_exists(comment_id, activity.id)
        lo = parse_limit_and_offset(criteria)
        replies, total = self.relation_repo.page_for_parent(
            Comment,
            Comment.parent_id,
            comment.id,
            offset=lo.offset,
            limit=lo.limit,
            where=(Comment.activity_id == activity.id,),
        )
        items = self.resolver.resolve_comments(viewer_id, [reply.id for reply in replies], with_replies=False)
        return decorate_with_paginated_response(items, lo, total)

    def get_comment_likes(
        self,
        viewer_id: UUID,
        activity_id: UUID,
        comment_id: UUID,
        criteria: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        activity = self._validate_privacy_access(activity_id, viewer_id)
        comment = self._validate_comment_exists(comment_id, activity.id)
        lo = parse_limit_and_offset(criteria)
        likes, total = self.relation_repo.page_for_parent(
            CommentLike, CommentLike.comment_id, comment.id, offset=lo.offset, limit=lo.limit
        )
        return decorate_with_paginated_response(self._users_of(likes), lo, total)

    def _validate_privacy_access(self, activity_id: UUID, viewer_id: UUID) -> Activity:
        """Load the activity and check the viewer may see it.

        Shared activities are visible to accepted followers of the author,
        private ones to invitees. The author always has access.
        """
        activity = self.activity_repo.get_by_id(activity_id)
        if not activity:
            raise NotFoundError(f"activity {activity_id} not found")
        if activity.author_id == viewer_id:
            return activity

        if activity.privacy == PRIVACY_SHARED:
            if not self.activity_repo.is_accepted_follower(activity.author_id, viewer_id):
                logger.info(
                    "shared activity access denied",
                    extra={"activity_id": str(activity_id), "viewer_id": str(viewer_id)},
                )
                raise PermissionDeniedError(
                    "user is not follower of activity author", code=SHARED_ACTIVITY_ILLEGAL_ACCESS
                )
        elif activity.privacy == PRIVACY_PRIVATE:
            if not self.activity_repo.is_invitee(activity.id, viewer_id):
                logger.info(
                    "private activity access denied",
                    extra={"activity_id": str(activity_id), "viewer_id": str(viewer_id)},
                )
                raise PermissionDeniedError("user is not an invitee", code=PRIVATE_ACTIVITY_ILLEGAL_ACCESS)
        return activity

    def _validate_comment_exists(self, comment_id: UUID, activity_id: UUID) -> Comment:
        # a comment is only reachable through the activity it was posted on
        comment = self.activity_repo.get_comment(comment_id)
        if not comment or comment.activity_id != activity_id:
            raise NotFoundError(f"comment {comment_id} not found")
        return comment

    def _users_of(self, rows: list[ActivityLike] | list[CommentLike]) -> list[UserSummary]:
        users = self.user_repo.get_many(row.user_id for row in rows)
        return [UserSummary.model_validate(users[row.user_id]) for row in rows if row.user_id in users]
