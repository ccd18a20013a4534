from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile

from vidtube.auth import CurrentUser
from vidtube.responses import respond
from vidtube.services import videos as videos_service

router = APIRouter(prefix="/api/v1/videos", tags=["videos"])


@router.get("")
def list_videos(
    user: CurrentUser,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    query: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_type: Annotated[str | None, Query(alias="sortType")] = None,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
):
    videos = videos_service.list_videos(page, limit, query, sort_by, sort_type, user_id)
    return respond(200, videos, "Videos fetched successfully")


@router.post("")
def publish_video(
    user: CurrentUser,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    video_file: Annotated[UploadFile | None, File(alias="videoFile")] = None,
    thumbnail: Annotated[UploadFile | None, File()] = None,
):
    video = videos_service.publish_video(title, description, video_file, thumbnail, user)
    return respond(201, video, "Video published successfully")


@router.patch("/toggle/publish/{video_id}")
def toggle_publish(video_id: str, user: CurrentUser):
    video = videos_service.toggle_publish(video_id, user)
    state = "published" if video.get("isPublished") else "unpublished"
    return respond(200, video, f"Video {state} successfully")


@router.get("/{video_id}")
def get_video(video_id: str, user: CurrentUser):
    return respond(200, videos_service.get_video(video_id, user), "Video fetched successfully")


@router.patch("/{video_id}")
def update_video(
    video_id: str,
    user: CurrentUser,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    thumbnail: Annotated[UploadFile | None, File()] = None,
):
    video = videos_service.update_video(video_id, title, description, thumbnail, user)
    return respond(200, video, "Video updated successfully")


@router.delete("/{video_id}")
def delete_video(video_id: str, user: CurrentUser):
    videos_service.delete_video(video_id, user)
    return respond(200, {}, "Video deleted successfully")
