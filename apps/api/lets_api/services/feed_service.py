from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from lets_api.core.config import settings
from lets_api.core.constants import (
    MY_FEED_VERB_ORDER,
    VERB_JOIN,
    VERB_PHOTO_COMMENT,
    VERB_POST,
    VERB_SHARE,
)
from lets_api.core.pagination import LimitOffset, decorate_with_paginated_response, parse_limit_and_offset
from lets_api.core.timeutils import days_ago_ms, now_ms
from lets_api.repositories.action_repo import ActionRepository
from lets_api.repositories.activity_repo import ActivityRepository
from lets_api.schemas.feed import FeedItem
from lets_api.services.activity_detail import ActivityDetailResolver

logger = logging.getLogger(__name__)


class FeedService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.activity_repo = ActivityRepository(db)
        self.action_repo = ActionRepository(db)
        self.resolver = ActivityDetailResolver(db)

    def get_public_feeds(self, viewer_id: UUID, criteria: Mapping[str, Any] | None = None) -> dict[str, Any]:
        lo = parse_limit_and_offset(criteria)
        ids, total = self.activity_repo.page_ids(self.activity_repo.public_ids_stmt(), offset=lo.offset, limit=lo.limit)
        logger.debug("public feed", extra={"viewer_id": str(viewer_id), "offset": lo.offset, "total": total})
        return self._activity_page(viewer_id, ids, lo, total)

    def get_profile_feeds(
        self,
        viewer_id: UUID,
        user_id: UUID,
        criteria: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Activities authored by ``user_id``; other viewers only see ones that have not ended."""
        lo = parse_limit_and_offset(criteria)
        ends_after = None if viewer_id == user_id else now_ms()
        stmt = self.activity_repo.authored_ids_stmt(user_id, ends_after=ends_after)
        ids, total = self.activity_repo.page_ids(stmt, offset=lo.offset, limit=lo.limit)
        logger.debug(
            "profile feed",
            extra={"viewer_id": str(viewer_id), "user_id": str(user_id), "offset": lo.offset, "total": total},
        )
        return self._activity_page(viewer_id, ids, lo, total)

    def get_upcoming_feeds(
        self,
        viewer_id: UUID,
        user_id: UUID,
        criteria: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Activities ``user_id`` authored or RSVP'd to that ended at most N days ago."""
        lo = parse_limit_and_offset(criteria)
        ends_after = days_ago_ms(settings.upcoming_feeds_past_n_days)
        stmt = self.activity_repo.authored_or_rsvped_ids_stmt(user_id, ends_after=ends_after)
        ids, total = self.activity_repo.page_ids(stmt, offset=lo.offset, limit=lo.limit)
        logger.debug(
            "upcoming feed",
            extra={"viewer_id": str(viewer_id), "user_id": str(user_id), "offset": lo.offset, "total": total},
        )
        return self._activity_page(viewer_id, ids, lo, total)

    def get_my_feeds(self, viewer_id: UUID, criteria: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Reactions on the viewer's content plus the viewer's own posts and shares.

        The action log is collapsed to the latest action per (verb, object)
        before paging. Items of a page are grouped by verb in the order post,
        share, join, photo-comment.
        """
        lo = parse_limit_and_offset(criteria)
        activity_ids = self.activity_repo.authored_ids(viewer_id)
        comment_ids = self.activity_repo.photo_comment_ids(activity_ids)

        actions, total = self.action_repo.page_latest_by_verb_object(
            actor_id=viewer_id,
            object_ids=activity_ids + comment_ids,
            offset=lo.offset,
            limit=lo.limit,
        )
        logger.debug("my feed", extra={"viewer_id": str(viewer_id), "offset": lo.offset, "total": total})
        if not actions:
            return decorate_with_paginated_response([], lo, total)

        by_verb: dict[str, list[UUID]] = {verb: [] for verb in MY_FEED_VERB_ORDER}
        for action in actions:
            by_verb[action.verb].append(action.object_id)

        items: list[FeedItem] = []
        for verb in (VERB_POST, VERB_SHARE, VERB_JOIN):
            items.extend(
                FeedItem(verb=verb, item=detail)
                for detail in self.resolver.resolve_activities(viewer_id, by_verb[verb])
            )
        items.extend(
            FeedItem(verb=VERB_PHOTO_COMMENT, item=detail)
            for detail in self.resolver.resolve_comments(viewer_id, by_verb[VERB_PHOTO_COMMENT])
        )
        return decorate_with_paginated_response(items, lo, total)

    def _activity_page(self, viewer_id: UUID, ids: list[UUID], lo: LimitOffset, total: int) -> dict[str, Any]:
        if not ids:
            return decorate_with_paginated_response([], lo, total)
        items = [FeedItem(verb=VERB_POST, item=detail) for detail in self.resolver.resolve_activities(viewer_id, ids)]
        return decorate_with_paginated_response(items, lo, total)
