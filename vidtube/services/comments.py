from datetime import datetime, timezone

from pymongo import ReturnDocument

from vidtube.database import COMMENTS, get_database
from vidtube.exceptions import InternalError, NotFoundError
from vidtube.models.common import Page, Requester
from vidtube.pipelines import newest_first, owner_lookup, paginate
from vidtube.validation import fetch_owned, parse_object_id, require_text

CONTENT_REQUIRED = "Comment content is required"


def video_comments_pipeline(video_id) -> list[dict]:
    return [
        {"$match": {"video": video_id}},
        *owner_lookup(),
        newest_first(),
    ]


def get_video_comments(video_id: str, page: int = 1, limit: int = 10) -> Page:
    """One page of a video's comments, newest first."""
    object_id = parse_object_id(video_id, "video")
    return paginate(get_database()[COMMENTS], video_comments_pipeline(object_id), page, limit)


def add_comment(video_id: str, content: str | None, requester: Requester) -> dict:
    object_id = parse_object_id(video_id, "video")
    content = require_text(content, CONTENT_REQUIRED)
    now = datetime.now(timezone.utc)
    comment = {
        "content": content,
        "video": object_id,
        "owner": requester.id,
        "createdAt": now,
        "updatedAt": now,
    }
    result = get_database()[COMMENTS].insert_one(comment)
    if not result.acknowledged:
        raise InternalError("Failed to add comment")
    comment["_id"] = result.inserted_id
    return comment


def update_comment(comment_id: str, content: str | None, requester: Requester) -> dict:
    object_id = parse_object_id(comment_id, "comment")
    content = require_text(content, CONTENT_REQUIRED)
    comments = get_database()[COMMENTS]
    fetch_owned(comments, object_id, requester, "comment", "update")
    updated = comments.find_one_and_update(
        {"_id": object_id},
        {"$set": {"content": content, "updatedAt": datetime.now(timezone.utc)}},
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        raise NotFoundError("Comment not found")
    return updated


def delete_comment(comment_id: str, requester: Requester) -> None:
    object_id = parse_object_id(comment_id, "comment")
    comments = get_database()[COMMENTS]
    fetch_owned(comments, object_id, requester, "comment", "delete")
    comments.delete_one({"_id": object_id})
