import os
import sys
import uuid
from pathlib import Path

import pytest

API_ROOT = Path(__file__).resolve().parents[1]
if str(API_ROOT) not in sys.path:
    sys.path.insert(0, str(API_ROOT))

# Minimal required settings for importing lets_api.core.config.settings in tests.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from lets_api.core.timeutils import now_ms  # noqa: E402
from lets_api.db.base import (  # noqa: E402
    Action,
    Activity,
    ActivityInvitee,
    ActivityLike,
    ActivityPhoto,
    ActivityRsvp,
    Base,
    Comment,
    CommentLike,
    User,
    UserBlock,
    UserFollower,
)

HOUR_MS = 60 * 60 * 1000


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class Seeder:
    """Inserts rows with explicit timestamps so ordering assertions are stable."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self._clock = 1_700_000_000_000

    def tick(self) -> int:
        self._clock += 1000
        return self._clock

    def _add(self, row):
        self.db.add(row)
        self.db.flush()
        return row

    def user(self, username: str, **fields) -> User:
        now = self.tick()
        return self._add(
            User(
                username=username,
                full_name=username.title(),
                email=f"{username}@example.com",
                password_hash="secret-hash",
                created_at=now,
                updated_at=now,
                **fields,
            )
        )

    def activity(self, author: User, *, privacy: str = "public", start: int | None = None, **fields) -> Activity:
        now = self.tick()
        if start is None:
            start = now_ms() + 24 * HOUR_MS
        fields.setdefault("duration", HOUR_MS)
        fields.setdefault("title", "run")
        return self._add(
            Activity(author_id=author.id, privacy=privacy, start=start, created_at=now, updated_at=now, **fields)
        )

    def like(self, activity: Activity, user: User) -> ActivityLike:
        now = self.tick()
        return self._add(ActivityLike(activity_id=activity.id, user_id=user.id, created_at=now, updated_at=now))

    def rsvp(self, activity: Activity, user: User) -> ActivityRsvp:
        now = self.tick()
        return self._add(ActivityRsvp(activity_id=activity.id, user_id=user.id, created_at=now, updated_at=now))

    def invite(self, activity: Activity, user: User) -> ActivityInvitee:
        now = self.tick()
        return self._add(ActivityInvitee(activity_id=activity.id, invitee_id=user.id, created_at=now, updated_at=now))

    def photo(self, activity: Activity, *, comment: Comment | None = None) -> ActivityPhoto:
        now = self.tick()
        return self._add(
            ActivityPhoto(
                activity_id=activity.id,
                comment_id=comment.id if comment else None,
                photo={"key": f"photos/{uuid.uuid4()}.jpg"},
                created_at=now,
                updated_at=now,
            )
        )

    def comment(
        self,
        activity: Activity,
        author: User,
        *,
        parent: Comment | None = None,
        photos: list | None = None,
        text: str = "nice",
    ) -> Comment:
        now = self.tick()
        return self._add(
            Comment(
                activity_id=activity.id,
                author_id=author.id,
                text=text,
                photos=photos,
                parent_id=parent.id if parent else None,
                created_at=now,
                updated_at=now,
            )
        )

    def comment_like(self, comment: Comment, user: User) -> CommentLike:
        now = self.tick()
        return self._add(CommentLike(comment_id=comment.id, user_id=user.id, created_at=now, updated_at=now))

    def follow(self, follower: User, user: User, *, status: int = 1) -> UserFollower:
        now = self.tick()
        return self._add(
            UserFollower(user_id=user.id, follower_id=follower.id, status=status, created_at=now, updated_at=now)
        )

    def block(self, user: User, blocked: User) -> UserBlock:
        now = self.tick()
        return self._add(UserBlock(user_id=user.id, blocked_id=blocked.id, created_at=now, updated_at=now))

    def action(self, actor: User, verb: str, object_id: uuid.UUID) -> Action:
        now = self.tick()
        return self._add(Action(actor_id=actor.id, verb=verb, object_id=object_id, created_at=now, updated_at=now))


@pytest.fixture
def seed(db) -> Seeder:
    return Seeder(db)
