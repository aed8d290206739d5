from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lets_api.core.constants import FOLLOW_STATUS_ACCEPTED, FOLLOW_STATUS_PENDING, FOLLOW_STATUS_REJECTED
from lets_api.core.errors import NotFoundError, PermissionDeniedError
from lets_api.core.pagination import decorate_with_paginated_response, parse_limit_and_offset
from lets_api.models.user import User
from lets_api.models.user_relations import UserBlock, UserFollower
from lets_api.repositories.relation_repo import RelationRepository
from lets_api.repositories.user_repo import UserRepository
from lets_api.schemas.user import FollowState, UserSummary
from lets_api.services.follow_state import FollowStateService

logger = logging.getLogger(__name__)


class SocialService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.relation_repo = RelationRepository(db)
        self.follow_state_service = FollowStateService(db)

    def get_user_followers(
        self,
        viewer_id: UUID,
        user_id: UUID,
        criteria: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Users following ``user_id``; accepted ones unless ``criteria["status"]`` asks otherwise."""
        status = FOLLOW_STATUS_ACCEPTED
        if criteria and criteria.get("status") is not None:
            status = int(criteria["status"])
        lo = parse_limit_and_offset(criteria)
        rows, total = self.relation_repo.page_for_parent(
            UserFollower,
            UserFollower.user_id,
            user_id,
            offset=lo.offset,
            limit=lo.limit,
            where=(UserFollower.status == status,),
        )
        states = self._follow_states(viewer_id, [row.follower_id for row in rows])
        return decorate_with_paginated_response(states, lo, total)

    def get_user_followings(
        self,
        viewer_id: UUID,
        user_id: UUID,
        criteria: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Users ``user_id`` follows.

        Others see accepted followings (or ``criteria["status"]``); a user
        reading their own list sees every request whatever its status.
        """
        where = ()
        if viewer_id != user_id:
            status = FOLLOW_STATUS_ACCEPTED
            if criteria and criteria.get("status") is not None:
                status = int(criteria["status"])
            where = (UserFollower.status == status,)
        lo = parse_limit_and_offset(criteria)
        rows, total = self.relation_repo.page_for_parent(
            UserFollower,
            UserFollower.follower_id,
            user_id,
            offset=lo.offset,
            limit=lo.limit,
            where=where,
        )
        states = self._follow_states(viewer_id, [row.user_id for row in rows])
        return decorate_with_paginated_response(states, lo, total)

    def follow_user(self, *, viewer_id: UUID, user_id: UUID, target_id: UUID) -> FollowState:
        self._ensure_own_account(viewer_id, user_id, "user can only follow from self account")
        target = self._get_target(target_id)
        if target.id == user_id:
            raise PermissionDeniedError("user cannot follow self")

        exists = self.db.scalar(
            select(UserFollower).where(UserFollower.user_id == target.id, UserFollower.follower_id == user_id)
        )
        if not exists:
            status = FOLLOW_STATUS_PENDING if target.approve_followers else FOLLOW_STATUS_ACCEPTED
            self.db.add(UserFollower(user_id=target.id, follower_id=user_id, status=status))
            self._commit_idempotent()
            logger.info(
                "follow requested",
                extra={"follower_id": str(user_id), "user_id": str(target.id), "status": status},
            )
        return self.follow_state_service.compute_single_user_follow_state(viewer_id, target.id)

    def unfollow_user(self, *, viewer_id: UUID, user_id: UUID, target_id: UUID) -> FollowState:
        self._ensure_own_account(viewer_id, user_id, "user can only unfollow from self account")
        self.db.execute(
            delete(UserFollower).where(UserFollower.user_id == target_id, UserFollower.follower_id == user_id)
        )
        self.db.commit()
        logger.info("unfollowed", extra={"follower_id": str(user_id), "user_id": str(target_id)})
        return self.follow_state_service.compute_single_user_follow_state(viewer_id, target_id)

    def approve_follower(self, *, viewer_id: UUID, user_id: UUID, follower_id: UUID) -> FollowState:
        self._ensure_own_account(viewer_id, user_id, "user can only approve followers for self account")
        return self._set_follower_status(user_id, follower_id, FOLLOW_STATUS_ACCEPTED, viewer_id=viewer_id)

    def reject_follower(self, *, viewer_id: UUID, user_id: UUID, follower_id: UUID) -> FollowState:
        self._ensure_own_account(viewer_id, user_id, "user can only reject followers for self account")
        return self._set_follower_status(user_id, follower_id, FOLLOW_STATUS_REJECTED, viewer_id=viewer_id)

    def block_user(self, *, viewer_id: UUID, user_id: UUID, target_id: UUID) -> FollowState:
        self._ensure_own_account(viewer_id, user_id, "user can only block from self account")
        target = self._get_target(target_id)
        if target.id == user_id:
            raise PermissionDeniedError("user cannot block self")

        exists = self.db.scalar(
            select(UserBlock).where(UserBlock.user_id == user_id, UserBlock.blocked_id == target.id)
        )
        if not exists:
            self.db.add(UserBlock(user_id=user_id, blocked_id=target.id))
            self._commit_idempotent()
            logger.info("blocked", extra={"user_id": str(user_id), "blocked_id": str(target.id)})
        return self.follow_state_service.compute_single_user_follow_state(viewer_id, target.id)

    def unblock_user(self, *, viewer_id: UUID, user_id: UUID, target_id: UUID) -> FollowState:
        self._ensure_own_account(viewer_id, user_id, "user can only unblock from self account")
        self.db.execute(delete(UserBlock).where(UserBlock.user_id == user_id, UserBlock.blocked_id == target_id))
        self.db.commit()
        logger.info("unblocked", extra={"user_id": str(user_id), "blocked_id": str(target_id)})
        return self.follow_state_service.compute_single_user_follow_state(viewer_id, target_id)

    def _set_follower_status(self, user_id: UUID, follower_id: UUID, status: int, *, viewer_id: UUID) -> FollowState:
        row = self.db.scalar(
            select(UserFollower).where(UserFollower.user_id == user_id, UserFollower.follower_id == follower_id)
        )
        if row and row.status != status:
            row.status = status
            self.db.commit()
            logger.info(
                "follower status changed",
                extra={"user_id": str(user_id), "follower_id": str(follower_id), "status": status},
            )
        return self.follow_state_service.compute_single_user_follow_state(viewer_id, follower_id)

    def _follow_states(self, viewer_id: UUID, user_ids: list[UUID]) -> list:
        users = self.user_repo.get_many(user_ids)
        summaries = [UserSummary.model_validate(users[user_id]) for user_id in user_ids if user_id in users]
        return self.follow_state_service.compute_follow_states(viewer_id, summaries)

    def _get_target(self, target_id: UUID) -> User:
        target = self.user_repo.get_by_id(target_id)
        if not target:
            raise NotFoundError(f"user {target_id} not found")
        return target

    def _commit_idempotent(self) -> None:
        # a concurrent request may have inserted the same pair first
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info("relationship row already exists")

    @staticmethod
    def _ensure_own_account(viewer_id: UUID, user_id: UUID, message: str) -> None:
        if viewer_id != user_id:
            raise PermissionDeniedError(message)
