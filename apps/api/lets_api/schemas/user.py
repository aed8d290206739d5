from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """A user as exposed by read paths; the password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    full_name: str
    email: str
    bio: str | None = None
    photo: dict | None = None
    created_at: int
    updated_at: int
    # viewer relationship bits, only set where a read path annotates user lists
    follow_state: int | None = None


class UserList(BaseModel):
    items: list[UserSummary]
    total: int


class FollowState(BaseModel):
    follow_state: int


class UserFollowState(BaseModel):
    user: UserSummary
    follow_state: int


class UserFollowStatePage(BaseModel):
    data: list[UserFollowState]
    paging: dict[str, int]


class UserPage(BaseModel):
    data: list[UserSummary]
    paging: dict[str, int]
