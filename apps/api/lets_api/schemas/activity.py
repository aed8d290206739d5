from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from lets_api.schemas.user import UserList, UserSummary


class InteractionRecord(BaseModel):
    """An rsvp, activity like or comment like row owned by the viewer."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    activity_id: UUID | None = None
    comment_id: UUID | None = None
    created_at: int
    updated_at: int


class PhotoRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    activity_id: UUID
    comment_id: UUID | None = None
    photo: dict | None = None
    created_at: int
    updated_at: int


class PhotoList(BaseModel):
    items: list[PhotoRecord]
    total: int


class CountSummary(BaseModel):
    total: int


class ActivityFields(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str | None = None
    start: int | None = None
    duration: int | None = None
    location: str | None = None
    meeting_point: str | None = None
    notes: str | None = None
    privacy: str
    author_id: UUID
    parent_id: UUID | None = None
    created_at: int
    updated_at: int


class ActivityRecord(ActivityFields):
    photos: list | None = None


class ParentActivity(ActivityRecord):
    """One-hop view of a shared activity's original; never expanded further."""

    rsvp: CountSummary
    author: UserSummary | None = None
    parent: None = None


class CommentView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    activity_id: UUID
    author_id: UUID
    text: str | None = None
    photos: list | None = None
    parent_id: UUID | None = None
    created_at: int
    updated_at: int
    author: UserSummary | None = None
    current_user_like: InteractionRecord | None = None


class CommentList(BaseModel):
    items: list[CommentView]
    total: int


class CommentDetail(CommentView):
    activity: ActivityRecord | None = None
    likes: UserList
    # replies; only expanded for photo comments surfaced in feeds
    comments: CommentList | None = None


class ActivityDetail(ActivityFields):
    rsvp: UserList
    likes: UserList
    photos: PhotoList
    comments: CommentList
    author: UserSummary | None = None
    parent: ParentActivity | None = None
    current_user_rsvp: InteractionRecord | None = None
    current_user_like: InteractionRecord | None = None


class CommentDetailPage(BaseModel):
    data: list[CommentDetail]
    paging: dict[str, int]
