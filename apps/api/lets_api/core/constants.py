PRIVACY_PRIVATE = "private"
PRIVACY_SHARED = "shared"
PRIVACY_PUBLIC = "public"
ALLOWED_PRIVACY = {PRIVACY_PRIVATE, PRIVACY_SHARED, PRIVACY_PUBLIC}

VERB_POST = "post"
VERB_DELETE = "delete"
VERB_SHARE = "share"
VERB_JOIN = "join"
VERB_REMOVE_RSVP = "remove-rsvp"
VERB_PHOTO_COMMENT = "photo-comment"
ALLOWED_VERBS = {VERB_POST, VERB_DELETE, VERB_SHARE, VERB_JOIN, VERB_REMOVE_RSVP, VERB_PHOTO_COMMENT}

# verbs that are reactions on content owned by the feed viewer
MY_FEED_REACTION_VERBS = (VERB_JOIN, VERB_PHOTO_COMMENT)
# verbs the feed viewer performed themselves
MY_FEED_OWN_VERBS = (VERB_POST, VERB_SHARE)
# concatenation order of the resolved "my feed" groups
MY_FEED_VERB_ORDER = (VERB_POST, VERB_SHARE, VERB_JOIN, VERB_PHOTO_COMMENT)

FOLLOW_STATUS_PENDING = 0
FOLLOW_STATUS_ACCEPTED = 1
FOLLOW_STATUS_REJECTED = 2
