from uuid import uuid4

import pytest

from lets_api.core.errors import NotFoundError, PermissionDeniedError
from lets_api.services.activity_service import ActivityService


def test_activity_detail_requires_existing_activity(db, seed) -> None:
    viewer = seed.user("viewer")

    with pytest.raises(NotFoundError) as exc:
        ActivityService(db).get_activity_detail(viewer.id, uuid4())

    assert exc.value.code == "E1030"


def test_shared_activity_is_limited_to_accepted_followers(db, seed) -> None:
    author = seed.user("author")
    follower = seed.user("follower")
    pending = seed.user("pending")
    activity = seed.activity(author, privacy="shared")
    seed.follow(follower, author, status=1)
    seed.follow(pending, author, status=0)
    service = ActivityService(db)

    assert service.get_activity_detail(follower.id, activity.id).id == activity.id
    assert service.get_activity_detail(author.id, activity.id).id == activity.id
    with pytest.raises(PermissionDeniedError) as exc:
        service.get_activity_detail(pending.id, activity.id)

    assert exc.value.code == "E11010"


def test_private_activity_is_limited_to_invitees(db, seed) -> None:
    author = seed.user("author")
    invitee = seed.user("invitee")
    stranger = seed.user("stranger")
    activity = seed.activity(author, privacy="private")
    seed.invite(activity, invitee)
    service = ActivityService(db)

    assert service.get_activity_detail(invitee.id, activity.id).author.id == author.id
    with pytest.raises(PermissionDeniedError) as exc:
        service.get_activity_detail(stranger.id, activity.id)

    assert exc.value.code == "E11020"


def test_get_comments_pages_root_comments(db, seed) -> None:
    viewer = seed.user("viewer")
    activity = seed.activity(viewer)
    first = seed.comment(activity, viewer, text="first")
    second = seed.comment(activity, viewer, text="second", photos=[{"key": "x.jpg"}])
    seed.comment(activity, viewer, parent=second, text="reply")
    seed.comment_like(first, viewer)

    response = ActivityService(db).get_comments(viewer.id, activity.id, {"limit": 1, "offset": 0})

    assert [item.id for item in response["data"]] == [second.id]
    assert response["paging"] == {"total": 2, "next": 1}
    assert response["data"][0].activity.id == activity.id

    rest = ActivityService(db).get_comments(viewer.id, activity.id, {"limit": 1, "offset": 1})
    assert rest["data"][0].likes.total == 1
    assert rest["data"][0].current_user_like is not None


def test_get_likes_lists_users_newest_first(db, seed) -> None:
    viewer = seed.user("viewer")
    friend = seed.user("friend")
    activity = seed.activity(viewer)
    seed.like(activity, viewer)
    seed.like(activity, friend)

    response = ActivityService(db).get_likes(viewer.id, activity.id, {})

    assert [user.username for user in response["data"]] == ["friend", "viewer"]
    assert response["paging"] == {"total": 2}


def test_comment_replies_and_likes(db, seed) -> None:
    viewer = seed.user("viewer")
    friend = seed.user("friend")
    activity = seed.activity(viewer)
    photo_comment = seed.comment(activity, friend, photos=[{"key": "x.jpg"}])
    reply = seed.comment(activity, viewer, parent=photo_comment)
    seed.comment_like(photo_comment, friend)
    service = ActivityService(db)

    replies = service.get_comment_replies(viewer.id, activity.id, photo_comment.id, {})
    likes = service.get_comment_likes(viewer.id, activity.id, photo_comment.id, {})

    assert [item.id for item in replies["data"]] == [reply.id]
    assert replies["data"][0].parent_id == photo_comment.id
    assert [user.id for user in likes["data"]] == [friend.id]


def test_comment_listings_require_existing_comment(db, seed) -> None:
    viewer = seed.user("viewer")
    activity = seed.activity(viewer)

    with pytest.raises(NotFoundError):
        ActivityService(db).get_comment_likes(viewer.id, activity.id, uuid4(), {})


def test_comment_listings_reject_comment_from_another_activity(db, seed) -> None:
    owner = seed.user("owner")
    outsider = seed.user("outsider")
    public = seed.activity(owner)
    hidden = seed.activity(owner, privacy="private")
    hidden_comment = seed.comment(hidden, owner, photos=[{"key": "h.jpg"}])
    seed.comment_like(hidden_comment, owner)
    seed.comment(hidden, owner, parent=hidden_comment)
    service = ActivityService(db)

    with pytest.raises(NotFoundError):
        service.get_comment_likes(outsider.id, public.id, hidden_comment.id, {})
    with pytest.raises(NotFoundError):
        service.get_comment_replies(outsider.id, public.id, hidden_comment.id, {})
