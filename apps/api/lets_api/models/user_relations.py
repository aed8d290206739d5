import uuid

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from lets_api.core.constants import FOLLOW_STATUS_PENDING
from lets_api.core.timeutils import now_ms
from lets_api.models.base import Base


class UserFollower(Base):
    """``follower_id`` asked to follow ``user_id``; ``status`` is 0 pending, 1 accepted, 2 rejected."""

    __tablename__ = "user_followers"
    __table_args__ = (
        Index("uq_user_followers_user_follower", "user_id", "follower_id", unique=True),
        Index("ix_user_followers_user_status", "user_id", "status"),
        Index("ix_user_followers_follower_status", "follower_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    follower_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=FOLLOW_STATUS_PENDING)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, onupdate=now_ms, nullable=False)


class UserBlock(Base):
    """``user_id`` has blocked ``blocked_id``."""

    __tablename__ = "user_blocks"
    __table_args__ = (
        Index("uq_user_blocks_user_blocked", "user_id", "blocked_id", unique=True),
        Index("ix_user_blocks_blocked_id", "blocked_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    blocked_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, onupdate=now_ms, nullable=False)
