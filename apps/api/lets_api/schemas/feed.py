from pydantic import BaseModel

from lets_api.schemas.activity import ActivityDetail, CommentDetail


class FeedItem(BaseModel):
    verb: str
    item: ActivityDetail | CommentDetail


class FeedPage(BaseModel):
    data: list[FeedItem]
    # "next" is present only when more rows follow this page
    paging: dict[str, int]
