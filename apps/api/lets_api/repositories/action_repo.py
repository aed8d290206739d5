import uuid
from collections.abc import Sequence

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from lets_api.core.constants import MY_FEED_OWN_VERBS, MY_FEED_REACTION_VERBS
from lets_api.models.action import Action


class ActionRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def page_latest_by_verb_object(
        self,
        *,
        actor_id: uuid.UUID,
        object_ids: Sequence[uuid.UUID],
        offset: int,
        limit: int,
    ) -> tuple[list[Action], int]:
        """Latest action per (verb, object) relevant to ``actor_id``'s own feed.

        Selected rows are reactions (join, photo-comment) on ``object_ids`` and
        the actor's own posts and shares. Deduplication happens before paging,
        so ``total`` counts distinct (verb, object) pairs.
        """
        conditions = [and_(Action.verb.in_(MY_FEED_OWN_VERBS), Action.actor_id == actor_id)]
        if object_ids:
            conditions.append(and_(Action.verb.in_(MY_FEED_REACTION_VERBS), Action.object_id.in_(object_ids)))

        rank = (
            func.row_number()
            .over(
                partition_by=(Action.verb, Action.object_id),
                order_by=(Action.updated_at.desc(), Action.id.desc()),
            )
            .label("row_rank")
        )
        ranked = select(Action.id, rank).where(or_(*conditions)).subquery()
        latest_ids = select(ranked.c.id).where(ranked.c.row_rank == 1)

        total = self.db.scalar(select(func.count()).select_from(latest_ids.subquery())) or 0
        stmt = (
            select(Action)
            .where(Action.id.in_(latest_ids))
            .order_by(Action.updated_at.desc(), Action.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.scalars(stmt)), int(total)
