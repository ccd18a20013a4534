from datetime import datetime, timezone

from pymongo import ReturnDocument

from vidtube.database import PLAYLISTS, VIDEOS, get_database
from vidtube.exceptions import BadRequestError, InternalError, NotFoundError
from vidtube.models.common import Requester
from vidtube.pipelines import join, owner_lookup
from vidtube.validation import fetch_owned, parse_object_id, require_text

NAME_REQUIRED = "Playlist name is required"

PLAYLIST_TOTALS = {
    "totalVideos": {"$size": "$videos"},
    "totalViews": {"$sum": "$videos.views"},
}


def _parse_pair(playlist_id: str, video_id: str):
    try:
        return parse_object_id(playlist_id, "playlist"), parse_object_id(video_id, "video")
    except BadRequestError as e:
        raise BadRequestError("Invalid playlist or video ID") from e


def create_playlist(name: str | None, description: str | None, requester: Requester) -> dict:
    name = require_text(name, NAME_REQUIRED)
    now = datetime.now(timezone.utc)
    playlist = {
        "name": name,
        "description": description or "",
        "videos": [],
        "owner": requester.id,
        "createdAt": now,
        "updatedAt": now,
    }
    result = get_database()[PLAYLISTS].insert_one(playlist)
    if not result.acknowledged:
        raise InternalError("Failed to create playlist")
    playlist["_id"] = result.inserted_id
    return playlist


def user_playlists_pipeline(owner_id) -> list[dict]:
    return [
        {"$match": {"owner": owner_id}},
        join(VIDEOS, "videos", "_id", "videos"),
        {"$addFields": PLAYLIST_TOTALS},
        {
            "$project": {
                "name": 1,
                "description": 1,
                "totalVideos": 1,
                "totalViews": 1,
                "createdAt": 1,
                "updatedAt": 1,
            },
        },
    ]


def get_user_playlists(user_id: str) -> list[dict]:
    owner_id = parse_object_id(user_id, "user")
    return list(get_database()[PLAYLISTS].aggregate(user_playlists_pipeline(owner_id)))


def playlist_detail_pipeline(playlist_id) -> list[dict]:
    return [
        {"$match": {"_id": playlist_id}},
        join(VIDEOS, "videos", "_id", "videos", pipeline=owner_lookup()),
        *owner_lookup(),
        {"$addFields": PLAYLIST_TOTALS},
    ]


def get_playlist(playlist_id: str) -> dict:
    """Playlist with its videos and owner joined."""
    object_id = parse_object_id(playlist_id, "playlist")
    results = list(get_database()[PLAYLISTS].aggregate(playlist_detail_pipeline(object_id)))
    if not results:
        raise NotFoundError("Playlist not found")
    return results[0]


def update_playlist(playlist_id: str, name: str | None, description: str | None, requester: Requester) -> dict:
    object_id = parse_object_id(playlist_id, "playlist")
    name = require_text(name, NAME_REQUIRED)
    playlists = get_database()[PLAYLISTS]
    current = fetch_owned(playlists, object_id, requester, "playlist", "update")
    return _apply(playlists, object_id, {
        "$set": {
            "name": name,
            "description": description or current.get("description", ""),
            "updatedAt": datetime.now(timezone.utc),
        },
    })


def delete_playlist(playlist_id: str, requester: Requester) -> None:
    object_id = parse_object_id(playlist_id, "playlist")
    playlists = get_database()[PLAYLISTS]
    fetch_owned(playlists, object_id, requester, "playlist", "delete")
    playlists.delete_one({"_id": object_id})


def add_video(playlist_id: str, video_id: str, requester: Requester) -> dict:
    """Append a video to the playlist; a video already present is rejected."""
    object_id, video_object_id = _parse_pair(playlist_id, video_id)
    playlists = get_database()[PLAYLISTS]
    current = fetch_owned(playlists, object_id, requester, "playlist", "update")
    if video_object_id in current.get("videos", []):
        raise BadRequestError("Video already exists in playlist")
    return _apply(playlists, object_id, {
        "$push": {"videos": video_object_id},
        "$set": {"updatedAt": datetime.now(timezone.utc)},
    })


def remove_video(playlist_id: str, video_id: str, requester: Requester) -> dict:
    object_id, video_object_id = _parse_pair(playlist_id, video_id)
    playlists = get_database()[PLAYLISTS]
    fetch_owned(playlists, object_id, requester, "playlist", "update")
    return _apply(playlists, object_id, {
        "$pull": {"videos": video_object_id},
        "$set": {"updatedAt": datetime.now(timezone.utc)},
    })


def _apply(playlists, object_id, update: dict) -> dict:
    updated = playlists.find_one_and_update({"_id": object_id}, update, return_document=ReturnDocument.AFTER)
    if updated is None:
        raise NotFoundError("Playlist not found")
    return updated
