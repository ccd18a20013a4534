from fastapi import APIRouter

from vidtube.auth import CurrentUser
from vidtube.models.common import Requester
from vidtube.responses import respond
from vidtube.services import likes as likes_service

router = APIRouter(prefix="/api/v1/likes", tags=["likes"])


def _toggle(target: str, target_id: str, user: Requester):
    result = likes_service.toggle_like(target, target_id, user)
    if result.is_liked:
        return respond(201, result, f"{target.capitalize()} liked successfully")
    return respond(200, result, f"{target.capitalize()} unliked successfully")


@router.post("/toggle/v/{video_id}")
def toggle_video_like(video_id: str, user: CurrentUser):
    return _toggle("video", video_id, user)


@router.post("/toggle/c/{comment_id}")
def toggle_comment_like(comment_id: str, user: CurrentUser):
    return _toggle("comment", comment_id, user)


@router.post("/toggle/t/{tweet_id}")
def toggle_tweet_like(tweet_id: str, user: CurrentUser):
    return _toggle("tweet", tweet_id, user)


@router.get("/videos")
def get_liked_videos(user: CurrentUser):
    return respond(200, likes_service.get_liked_videos(user), "Liked videos fetched successfully")
