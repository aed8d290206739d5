from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from lets_api.core.errors import NotFoundError, PermissionDeniedError
from lets_api.models.user_relations import UserFollower
from lets_api.services.social_service import SocialService


def test_follow_user_is_accepted_without_approval(db, seed) -> None:
    viewer = seed.user("viewer")
    target = seed.user("target")

    state = SocialService(db).follow_user(viewer_id=viewer.id, user_id=viewer.id, target_id=target.id)

    assert state.follow_state == 2


def test_follow_user_is_pending_when_target_approves_followers(db, seed) -> None:
    viewer = seed.user("viewer")
    target = seed.user("target", approve_followers=True)
    service = SocialService(db)

    first = service.follow_user(viewer_id=viewer.id, user_id=viewer.id, target_id=target.id)
    again = service.follow_user(viewer_id=viewer.id, user_id=viewer.id, target_id=target.id)

    assert first.follow_state == again.follow_state == 4
    assert len(db.query(UserFollower).all()) == 1


def test_follow_user_requires_existing_target(db, seed) -> None:
    viewer = seed.user("viewer")

    with pytest.raises(NotFoundError):
        SocialService(db).follow_user(viewer_id=viewer.id, user_id=viewer.id, target_id=uuid4())


def test_social_writes_are_limited_to_own_account() -> None:
    db = MagicMock()
    service = SocialService(db)
    viewer_id = uuid4()

    with pytest.raises(PermissionDeniedError) as exc:
        service.block_user(viewer_id=viewer_id, user_id=uuid4(), target_id=uuid4())

    assert exc.value.code == "E1040"
    db.commit.assert_not_called()


def test_unfollow_clears_follow_state(db, seed) -> None:
    viewer = seed.user("viewer")
    target = seed.user("target")
    seed.follow(viewer, target, status=1)

    state = SocialService(db).unfollow_user(viewer_id=viewer.id, user_id=viewer.id, target_id=target.id)

    assert state.follow_state == 0


def test_approve_and_reject_update_pending_request(db, seed) -> None:
    owner = seed.user("owner", approve_followers=True)
    fan = seed.user("fan")
    other = seed.user("other")
    request = seed.follow(fan, owner, status=0)
    rejected = seed.follow(other, owner, status=0)
    service = SocialService(db)

    service.approve_follower(viewer_id=owner.id, user_id=owner.id, follower_id=fan.id)
    service.reject_follower(viewer_id=owner.id, user_id=owner.id, follower_id=other.id)

    assert request.status == 1
    assert rejected.status == 2
    followers = service.get_user_followers(owner.id, owner.id, {})
    assert [item.user.id for item in followers["data"]] == [fan.id]
    assert followers["paging"] == {"total": 1}


def test_block_then_unblock(db, seed) -> None:
    viewer = seed.user("viewer")
    target = seed.user("target")
    service = SocialService(db)

    blocked = service.block_user(viewer_id=viewer.id, user_id=viewer.id, target_id=target.id)
    unblocked = service.unblock_user(viewer_id=viewer.id, user_id=viewer.id, target_id=target.id)

    assert blocked.follow_state == 16
    assert unblocked.follow_state == 0


def test_followers_can_be_filtered_by_status(db, seed) -> None:
    owner = seed.user("owner")
    accepted = seed.user("accepted")
    pending = seed.user("pending")
    seed.follow(accepted, owner, status=1)
    seed.follow(pending, owner, status=0)

    response = SocialService(db).get_user_followers(owner.id, owner.id, {"status": 0})

    assert [item.user.id for item in response["data"]] == [pending.id]


def test_followings_show_all_statuses_only_to_owner(db, seed) -> None:
    user = seed.user("user")
    visitor = seed.user("visitor")
    accepted = seed.user("accepted")
    pending = seed.user("pending")
    seed.follow(user, accepted, status=1)
    seed.follow(user, pending, status=0)
    seed.follow(visitor, accepted, status=1)
    service = SocialService(db)

    own = service.get_user_followings(user.id, user.id, {})
    visited = service.get_user_followings(visitor.id, user.id, {})

    assert [item.user.id for item in own["data"]] == [pending.id, accepted.id]
    assert [item.follow_state for item in own["data"]] == [4, 2]
    assert [item.user.id for item in visited["data"]] == [accepted.id]
    assert visited["data"][0].follow_state == 2
