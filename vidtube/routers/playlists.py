from fastapi import APIRouter

from vidtube.auth import CurrentUser
from vidtube.models.playlists import PlaylistRequest
from vidtube.responses import respond
from vidtube.services import playlists as playlists_service

router = APIRouter(prefix="/api/v1/playlists", tags=["playlists"])


@router.post("")
def create_playlist(request: PlaylistRequest, user: CurrentUser):
    playlist = playlists_service.create_playlist(request.name, request.description, user)
    return respond(201, playlist, "Playlist created successfully")


@router.get("/user/{user_id}")
def get_user_playlists(user_id: str, user: CurrentUser):
    playlists = playlists_service.get_user_playlists(user_id)
    return respond(200, playlists, "User playlists fetched successfully")


# --- Playlist videos ---


@router.patch("/add/{video_id}/{playlist_id}")
def add_video(video_id: str, playlist_id: str, user: CurrentUser):
    playlist = playlists_service.add_video(playlist_id, video_id, user)
    return respond(200, playlist, "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}")
def remove_video(video_id: str, playlist_id: str, user: CurrentUser):
    playlist = playlists_service.remove_video(playlist_id, video_id, user)
    return respond(200, playlist, "Video removed from playlist successfully")


# --- Single playlist ---


@router.get("/{playlist_id}")
def get_playlist(playlist_id: str, user: CurrentUser):
    return respond(200, playlists_service.get_playlist(playlist_id), "Playlist fetched successfully")


@router.patch("/{playlist_id}")
def update_playlist(playlist_id: str, request: PlaylistRequest, user: CurrentUser):
    playlist = playlists_service.update_playlist(playlist_id, request.name, request.description, user)
    return respond(200, playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}")
def delete_playlist(playlist_id: str, user: CurrentUser):
    playlists_service.delete_playlist(playlist_id, user)
    return respond(200, {}, "Playlist deleted successfully")
