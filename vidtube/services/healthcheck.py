import logging

from pymongo.errors import PyMongoError

from vidtube import database
from vidtube.exceptions import InternalError

logger = logging.getLogger(__name__)


def check_database() -> dict:
    """Ping MongoDB; an unreachable server is reported as a 500."""
    try:
        database.ping()
    except PyMongoError as e:
        logger.error("Database ping failed: %s", e)
        raise InternalError("Database unavailable") from e
    return {"database": "connected"}
