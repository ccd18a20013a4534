import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from bson import ObjectId
from fastapi.testclient import TestClient

from vidtube.models.common import Requester


# --- Canned identities and documents ---

USER_ID = ObjectId("65a000000000000000000001")
OTHER_USER_ID = ObjectId("65a000000000000000000002")
TWEET_ID = ObjectId("65b000000000000000000001")
PLAYLIST_ID = ObjectId("65c000000000000000000001")
VIDEO_ID = ObjectId("65d000000000000000000001")
COMMENT_ID = ObjectId("65e000000000000000000001")

AUTH_HEADERS = {"X-User-Id": str(USER_ID)}

CREATED_AT = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

TWEET_DOC = {
    "_id": TWEET_ID,
    "content": "hello world",
    "owner": USER_ID,
    "createdAt": CREATED_AT,
    "updatedAt": CREATED_AT,
}

PLAYLIST_DOC = {
    "_id": PLAYLIST_ID,
    "name": "Favourites",
    "description": "best of",
    "videos": [],
    "owner": USER_ID,
    "createdAt": CREATED_AT,
    "updatedAt": CREATED_AT,
}

COMMENT_DOC = {
    "_id": COMMENT_ID,
    "content": "nice video",
    "video": VIDEO_ID,
    "owner": USER_ID,
    "createdAt": CREATED_AT,
    "updatedAt": CREATED_AT,
}

VIDEO_DOC = {
    "_id": VIDEO_ID,
    "videoFile": "https://cdn.example.com/video.mp4",
    "thumbnail": "https://cdn.example.com/thumb.png",
    "title": "My first video",
    "description": "",
    "duration": 12.5,
    "views": 0,
    "isPublished": True,
    "owner": USER_ID,
    "createdAt": CREATED_AT,
    "updatedAt": CREATED_AT,
}

SERVICE_MODULES = ("tweets", "playlists", "likes", "comments", "videos")


@pytest.fixture
def requester():
    return Requester(id=USER_ID)


@pytest.fixture
def other_requester():
    return Requester(id=OTHER_USER_ID)


@pytest.fixture
def mock_db(mocker):
    """MagicMock database handed to every service module."""
    db = MagicMock()
    for module in SERVICE_MODULES:
        mocker.patch(f"vidtube.services.{module}.get_database", return_value=db)
    return db


@pytest.fixture
def collection(mock_db):
    """The collection returned for any db[name] lookup."""
    return mock_db.__getitem__.return_value


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from vidtube.main import api
    return TestClient(api)
