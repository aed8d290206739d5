from lets_api.models.action import Action
from lets_api.models.activity import Activity
from lets_api.models.activity_relations import ActivityInvitee, ActivityLike, ActivityPhoto, ActivityRsvp
from lets_api.models.base import Base
from lets_api.models.comment import Comment, CommentLike
from lets_api.models.user import User
from lets_api.models.user_relations import UserBlock, UserFollower

__all__ = [
    "Base",
    "User",
    "UserFollower",
    "UserBlock",
    "Activity",
    "ActivityInvitee",
    "ActivityRsvp",
    "ActivityLike",
    "ActivityPhoto",
    "Comment",
    "CommentLike",
    "Action",
]
