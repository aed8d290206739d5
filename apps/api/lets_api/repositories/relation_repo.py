"""Batched loaders over the child tables hanging off activities and comments.

Every loader takes the ids of a whole page of parents and issues a single
query, returning results keyed by parent id.
"""

import logging
import uuid
from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute, Session, aliased

from lets_api.core.errors import DataCorruptionError

logger = logging.getLogger(__name__)


class RelationRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def latest_per_parent(
        self,
        model: type,
        parent_column: InstrumentedAttribute,
        parent_ids: Sequence[uuid.UUID],
        *,
        limit: int,
        where: Sequence[Any] = (),
    ) -> dict[uuid.UUID, list[Any]]:
        """Up to ``limit`` rows per parent, most recently updated first."""
        if not parent_ids or limit <= 0:
            return {}
        rank = (
            func.row_number()
            .over(partition_by=parent_column, order_by=(model.updated_at.desc(), model.id.desc()))
            .label("row_rank")
        )
        ranked = select(model, rank).where(parent_column.in_(parent_ids), *where).subquery()
        row = aliased(model, ranked)
        stmt = select(row).where(ranked.c.row_rank <= limit).order_by(ranked.c[parent_column.key], ranked.c.row_rank)

        grouped: dict[uuid.UUID, list[Any]] = defaultdict(list)
        for record in self.db.scalars(stmt):
            grouped[getattr(record, parent_column.key)].append(record)
        return dict(grouped)

    def count_per_parent(
        self,
        parent_column: InstrumentedAttribute,
        parent_ids: Sequence[uuid.UUID],
        *,
        where: Sequence[Any] = (),
    ) -> dict[uuid.UUID, int]:
        if not parent_ids:
            return {}
        stmt = (
            select(parent_column, func.count())
            .where(parent_column.in_(parent_ids), *where)
            .group_by(parent_column)
        )
        return {parent_id: int(total) for parent_id, total in self.db.execute(stmt)}

    def owned_by_user(
        self,
        model: type,
        parent_column: InstrumentedAttribute,
        parent_ids: Sequence[uuid.UUID],
        *,
        user_id: uuid.UUID,
    ) -> dict[uuid.UUID, Any]:
        """The single row per parent that belongs to ``user_id``.

        Raises DataCorruptionError when a parent holds more than one such row.
        """
        if not parent_ids:
            return {}
        stmt = select(model).where(parent_column.in_(parent_ids), model.user_id == user_id)
        result: dict[uuid.UUID, Any] = {}
        for record in self.db.scalars(stmt):
            parent_id = getattr(record, parent_column.key)
            if parent_id in result:
                logger.error(
                    "duplicate user rows",
                    extra={"table": model.__tablename__, "parent_id": str(parent_id), "user_id": str(user_id)},
                )
                raise DataCorruptionError(
                    f"multiple {model.__tablename__} rows for {parent_id} and user {user_id}",
                )
            result[parent_id] = record
        return result

    def page_for_parent(
        self,
        model: type,
        parent_column: InstrumentedAttribute,
        parent_id: uuid.UUID,
        *,
        offset: int,
        limit: int,
        where: Sequence[Any] = (),
    ) -> tuple[list[Any], int]:
        """One parent's rows ordered by ``updated_at`` desc, plus their total count."""
        base = select(model).where(parent_column == parent_id, *where)
        total = self.db.scalar(select(func.count()).select_from(base.subquery())) or 0
        stmt = base.order_by(model.updated_at.desc(), model.id.desc()).offset(offset).limit(limit)
        return list(self.db.scalars(stmt)), int(total)
