"""Viewer-to-user relationship bitsets.

Bits: 64 self, 32 target blocked viewer, 16 viewer blocked target, and the
viewer's follow request on the target being rejected (8), pending (4) or
accepted (2).

List endpoints OR every bit that applies. The single-user endpoint reports
only the first bit that applies in that same order, so a viewer who both
follows and blocked a user sees 18 in lists but 16 on the profile.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from lets_api.core.constants import FOLLOW_STATUS_ACCEPTED, FOLLOW_STATUS_PENDING, FOLLOW_STATUS_REJECTED
from lets_api.models.user_relations import UserBlock, UserFollower
from lets_api.schemas.user import FollowState, UserFollowState, UserSummary

STATE_SELF = 64
STATE_BLOCKED_BY_TARGET = 32
STATE_VIEWER_BLOCKED_TARGET = 16
STATE_FOLLOW_REJECTED = 8
STATE_FOLLOW_PENDING = 4
STATE_FOLLOW_ACCEPTED = 2

# priority order used by the single-user state
_STATE_BITS = (
    ("is_self", STATE_SELF),
    ("blocked_by_target", STATE_BLOCKED_BY_TARGET),
    ("viewer_blocked_target", STATE_VIEWER_BLOCKED_TARGET),
    ("follow_rejected", STATE_FOLLOW_REJECTED),
    ("follow_pending", STATE_FOLLOW_PENDING),
    ("follow_accepted", STATE_FOLLOW_ACCEPTED),
)

_FOLLOW_STATUS_FACTS = {
    FOLLOW_STATUS_REJECTED: "follow_rejected",
    FOLLOW_STATUS_PENDING: "follow_pending",
    FOLLOW_STATUS_ACCEPTED: "follow_accepted",
}


@dataclass(frozen=True, slots=True)
class RelationshipFacts:
    is_self: bool = False
    blocked_by_target: bool = False
    viewer_blocked_target: bool = False
    follow_rejected: bool = False
    follow_pending: bool = False
    follow_accepted: bool = False

    def combined_state(self) -> int:
        state = 0
        for fact, bit in _STATE_BITS:
            if getattr(self, fact):
                state |= bit
        return state

    def first_match_state(self) -> int:
        for fact, bit in _STATE_BITS:
            if getattr(self, fact):
                return bit
        return 0


class FollowStateService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def load_facts(self, viewer_id: UUID, target_ids: Iterable[UUID]) -> dict[UUID, RelationshipFacts]:
        targets = set(target_ids)
        if not targets:
            return {}

        follow_status = {
            user_id: status
            for user_id, status in self.db.execute(
                select(UserFollower.user_id, UserFollower.status).where(
                    UserFollower.follower_id == viewer_id,
                    UserFollower.user_id.in_(targets),
                )
            )
        }
        viewer_blocked = set(
            self.db.scalars(
                select(UserBlock.blocked_id).where(UserBlock.user_id == viewer_id, UserBlock.blocked_id.in_(targets))
            )
        )
        blocked_by = set(
            self.db.scalars(
                select(UserBlock.user_id).where(UserBlock.blocked_id == viewer_id, UserBlock.user_id.in_(targets))
            )
        )

        facts: dict[UUID, RelationshipFacts] = {}
        for target_id in targets:
            follow_fact = _FOLLOW_STATUS_FACTS.get(follow_status.get(target_id))
            flags = {follow_fact: True} if follow_fact else {}
            facts[target_id] = RelationshipFacts(
                is_self=target_id == viewer_id,
                blocked_by_target=target_id in blocked_by,
                viewer_blocked_target=target_id in viewer_blocked,
                **flags,
            )
        return facts

    def compute_follow_states(self, viewer_id: UUID, users: Sequence[UserSummary]) -> list[UserFollowState]:
        facts = self.load_facts(viewer_id, (user.id for user in users))
        return [UserFollowState(user=user, follow_state=facts[user.id].combined_state()) for user in users]

    def compute_single_user_follow_state(self, viewer_id: UUID, user_id: UUID) -> FollowState:
        facts = self.load_facts(viewer_id, [user_id])[user_id]
        return FollowState(follow_state=facts.first_match_state())

    def annotate(self, viewer_id: UUID, users: Sequence[UserSummary]) -> None:
        """Set ``follow_state`` in place on each user, combining every applicable bit."""
        facts = self.load_facts(viewer_id, (user.id for user in users))
        for user in users:
            user.follow_state = facts[user.id].combined_state()
