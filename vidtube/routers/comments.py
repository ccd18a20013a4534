from fastapi import APIRouter, Query

from vidtube.auth import CurrentUser
from vidtube.models.comments import CommentRequest
from vidtube.responses import respond
from vidtube.services import comments as comments_service

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])


@router.get("/{video_id}")
def get_video_comments(
    video_id: str,
    user: CurrentUser,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    comments = comments_service.get_video_comments(video_id, page, limit)
    return respond(200, comments, "Comments fetched successfully")


@router.post("/{video_id}")
def add_comment(video_id: str, request: CommentRequest, user: CurrentUser):
    comment = comments_service.add_comment(video_id, request.content, user)
    return respond(201, comment, "Comment added successfully")


@router.patch("/c/{comment_id}")
def update_comment(comment_id: str, request: CommentRequest, user: CurrentUser):
    comment = comments_service.update_comment(comment_id, request.content, user)
    return respond(200, comment, "Comment updated successfully")


@router.delete("/c/{comment_id}")
def delete_comment(comment_id: str, user: CurrentUser):
    comments_service.delete_comment(comment_id, user)
    return respond(200, {}, "Comment deleted successfully")
