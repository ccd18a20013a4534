import logging
from datetime import datetime, timezone

from fastapi import UploadFile
from pymongo import ReturnDocument

from vidtube.config import get_settings
from vidtube.database import LIKES, SUBSCRIPTIONS, VIDEOS, get_database
from vidtube.exceptions import BadRequestError, InternalError, NotFoundError
from vidtube.models.common import Page, Requester
from vidtube.pipelines import contains, join, owner_lookup, paginate
from vidtube.services.media import upload_file
from vidtube.validation import fetch_owned, parse_object_id, require_text

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Video title is required"
SORTABLE_FIELDS = {"createdAt", "updatedAt", "views", "duration", "title"}

DETAIL_FIELDS = {
    "videoFile": 1,
    "thumbnail": 1,
    "title": 1,
    "description": 1,
    "duration": 1,
    "views": 1,
    "owner": 1,
    "likesCount": 1,
    "isLiked": 1,
    "createdAt": 1,
    "updatedAt": 1,
}


def _sort_stage(sort_by: str | None, sort_type: str | None) -> dict:
    if sort_by and sort_type:
        if sort_by not in SORTABLE_FIELDS:
            raise BadRequestError("Invalid sort field")
        return {"$sort": {sort_by: 1 if sort_type == "asc" else -1}}
    return {"$sort": {"createdAt": -1}}


def list_videos_pipeline(
    query: str | None = None,
    owner_id=None,
    sort_by: str | None = None,
    sort_type: str | None = None,
) -> list[dict]:
    pipeline = []
    if query:
        # $search must lead the pipeline
        pipeline.append({
            "$search": {
                "index": get_settings().video_search_index,
                "text": {"query": query, "path": ["title", "description"]},
            },
        })
    if owner_id is not None:
        pipeline.append({"$match": {"owner": owner_id}})
    pipeline.append({"$match": {"isPublished": True}})
    pipeline.append(_sort_stage(sort_by, sort_type))
    pipeline.extend(owner_lookup())
    return pipeline


def list_videos(
    page: int = 1,
    limit: int = 10,
    query: str | None = None,
    sort_by: str | None = None,
    sort_type: str | None = None,
    user_id: str | None = None,
) -> Page:
    """Published videos, optionally searched, filtered by owner and sorted."""
    owner_id = parse_object_id(user_id, "user") if user_id else None
    pipeline = list_videos_pipeline(query, owner_id, sort_by, sort_type)
    return paginate(get_database()[VIDEOS], pipeline, page, limit)


def publish_video(
    title: str | None,
    description: str | None,
    video_file: UploadFile | None,
    thumbnail: UploadFile | None,
    requester: Requester,
) -> dict:
    """Upload the media files and create a published video.

    A video file already uploaded is left in storage when the thumbnail upload fails.
    """
    title = require_text(title, TITLE_REQUIRED)
    if video_file is None:
        raise BadRequestError("Video file is required")
    if thumbnail is None:
        raise BadRequestError("Thumbnail is required")

    uploaded_video = upload_file(video_file)
    if uploaded_video is None:
        raise InternalError("Failed to upload video file")
    uploaded_thumbnail = upload_file(thumbnail)
    if uploaded_thumbnail is None:
        raise InternalError("Failed to upload thumbnail")

    now = datetime.now(timezone.utc)
    video = {
        "videoFile": uploaded_video.url,
        "thumbnail": uploaded_thumbnail.url,
        "title": title,
        "description": description or "",
        "duration": uploaded_video.duration,
        "views": 0,
        "isPublished": True,
        "owner": requester.id,
        "createdAt": now,
        "updatedAt": now,
    }
    result = get_database()[VIDEOS].insert_one(video)
    if not result.acknowledged:
        raise InternalError("Failed to publish video")
    video["_id"] = result.inserted_id
    return video


def video_detail_pipeline(video_id, requester_id) -> list[dict]:
    subscribers = [
        join(SUBSCRIPTIONS, "_id", "channel", "subscribers"),
        {
            "$addFields": {
                "subscribersCount": {"$size": "$subscribers"},
                "isSubscribed": contains(requester_id, "subscribers.subscriber"),
            },
        },
    ]
    return [
        {"$match": {"_id": video_id}},
        join(LIKES, "_id", "video", "likes"),
        *owner_lookup(
            extra_stages=subscribers,
            project={"username": 1, "fullName": 1, "avatar": 1, "subscribersCount": 1, "isSubscribed": 1},
        ),
        {
            "$addFields": {
                "likesCount": {"$size": "$likes"},
                "isLiked": contains(requester_id, "likes.likedBy"),
            },
        },
        {"$project": DETAIL_FIELDS},
    ]


def get_video(video_id: str, requester: Requester) -> dict:
    """Video read model for the requester. Every call counts as one view."""
    object_id = parse_object_id(video_id, "video")
    videos = get_database()[VIDEOS]
    results = list(videos.aggregate(video_detail_pipeline(object_id, requester.id)))
    if not results:
        raise NotFoundError("Video not found")
    videos.update_one({"_id": object_id}, {"$inc": {"views": 1}})
    logger.debug("Counted view of video %s", object_id)
    return results[0]


def update_video(
    video_id: str,
    title: str | None,
    description: str | None,
    thumbnail: UploadFile | None,
    requester: Requester,
) -> dict:
    object_id = parse_object_id(video_id, "video")
    title = require_text(title, TITLE_REQUIRED)
    videos = get_database()[VIDEOS]
    current = fetch_owned(videos, object_id, requester, "video", "update")

    thumbnail_url = current.get("thumbnail")
    if thumbnail is not None:
        uploaded = upload_file(thumbnail)
        if uploaded is None:
            raise InternalError("Failed to upload thumbnail")
        thumbnail_url = uploaded.url

    return _apply(videos, object_id, {
        "$set": {
            "title": title,
            "description": description or current.get("description", ""),
            "thumbnail": thumbnail_url,
            "updatedAt": datetime.now(timezone.utc),
        },
    })


def delete_video(video_id: str, requester: Requester) -> None:
    object_id = parse_object_id(video_id, "video")
    videos = get_database()[VIDEOS]
    fetch_owned(videos, object_id, requester, "video", "delete")
    videos.delete_one({"_id": object_id})


def toggle_publish(video_id: str, requester: Requester) -> dict:
    object_id = parse_object_id(video_id, "video")
    videos = get_database()[VIDEOS]
    current = fetch_owned(videos, object_id, requester, "video", "update")
    return _apply(videos, object_id, {
        "$set": {
            "isPublished": not current.get("isPublished", False),
            "updatedAt": datetime.now(timezone.utc),
        },
    })


def _apply(videos, object_id, update: dict) -> dict:
    updated = videos.find_one_and_update({"_id": object_id}, update, return_document=ReturnDocument.AFTER)
    if updated is None:
        raise NotFoundError("Video not found")
    return updated
