import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from vidtube.config import get_settings

logger = logging.getLogger(__name__)

USERS = "users"
TWEETS = "tweets"
PLAYLISTS = "playlists"
LIKES = "likes"
COMMENTS = "comments"
VIDEOS = "videos"
SUBSCRIPTIONS = "subscriptions"

# Non-unique lookup indexes; like uniqueness stays a check in the service layer.
INDEXES = {
    TWEETS: ["owner"],
    PLAYLISTS: ["owner"],
    COMMENTS: ["video"],
    LIKES: ["likedBy", "video", "comment", "tweet"],
    VIDEOS: ["owner"],
    SUBSCRIPTIONS: ["channel"],
}

_client: MongoClient | None = None


def get_client() -> MongoClient:
    """Return the process-wide MongoClient, connecting lazily on first use."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            tz_aware=True,
        )
    return _client


def get_database() -> Database:
    return get_client()[get_settings().database_name]


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def ping() -> bool:
    """Round-trip to the server; raises if MongoDB is unreachable."""
    get_client().admin.command("ping")
    return True


def ensure_indexes() -> None:
    db = get_database()
    for collection, fields in INDEXES.items():
        for field in fields:
            db[collection].create_index([(field, ASCENDING)])
    logger.info("Ensured indexes on %d collections", len(INDEXES))
