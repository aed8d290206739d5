import uuid

from sqlalchemy import BigInteger, CheckConstraint, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from lets_api.core.timeutils import now_ms
from lets_api.models.base import Base


class Action(Base):
    """Append-only log of user actions.

    ``object_id`` is an activity id for post/share/join/remove-rsvp/delete and a
    comment id for photo-comment. It is not a foreign key since the referenced
    row may be gone by the time the log is read.
    """

    __tablename__ = "actions"
    __table_args__ = (
        CheckConstraint(
            "verb IN ('post', 'delete', 'share', 'join', 'remove-rsvp', 'photo-comment')",
            name="ck_actions_verb",
        ),
        Index("ix_actions_actor_verb", "actor_id", "verb"),
        Index("ix_actions_object_verb", "object_id", "verb"),
        Index("ix_actions_updated_at", "updated_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    actor_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    verb: Mapped[str] = mapped_column(String(16), nullable=False)
    object_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    target: Mapped[str | None] = mapped_column(String(255), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)
