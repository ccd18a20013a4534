import logging
from datetime import datetime, timezone

from vidtube.database import LIKES, VIDEOS, get_database
from vidtube.models.common import Requester, ToggleResult
from vidtube.pipelines import first, join, newest_first, owner_lookup
from vidtube.validation import parse_object_id

logger = logging.getLogger(__name__)

LIKE_TARGETS = ("video", "comment", "tweet")


def toggle_like(target: str, target_id: str, requester: Requester) -> ToggleResult:
    """Remove the requester's like on target if it exists, otherwise add one.

    Not atomic: two concurrent toggles for the same pair can both see no like
    and insert twice.
    """
    if target not in LIKE_TARGETS:
        raise ValueError(f"Unknown like target: {target}")
    object_id = parse_object_id(target_id, target)
    likes = get_database()[LIKES]
    existing = likes.find_one({target: object_id, "likedBy": requester.id})
    if existing is not None:
        likes.delete_one({"_id": existing["_id"]})
        logger.debug("User %s unliked %s %s", requester.id, target, object_id)
        return ToggleResult(is_liked=False)

    now = datetime.now(timezone.utc)
    likes.insert_one({target: object_id, "likedBy": requester.id, "createdAt": now, "updatedAt": now})
    logger.debug("User %s liked %s %s", requester.id, target, object_id)
    return ToggleResult(is_liked=True)


def liked_videos_pipeline(user_id) -> list[dict]:
    return [
        {"$match": {"likedBy": user_id, "video": {"$exists": True}}},
        join(VIDEOS, "video", "_id", "video", pipeline=owner_lookup()),
        {"$addFields": {"video": first("video")}},
        {"$project": {"video": 1, "createdAt": 1}},
        newest_first(),
    ]


def get_liked_videos(requester: Requester) -> list[dict]:
    return list(get_database()[LIKES].aggregate(liked_videos_pipeline(requester.id)))
