from datetime import datetime, timezone

from pymongo import ReturnDocument

from vidtube.database import LIKES, TWEETS, get_database
from vidtube.exceptions import InternalError, NotFoundError
from vidtube.models.common import Requester
from vidtube.pipelines import join, newest_first, owner_lookup
from vidtube.validation import fetch_owned, parse_object_id, require_text

CONTENT_REQUIRED = "Tweet content is required"


def create_tweet(content: str | None, requester: Requester) -> dict:
    """Post a tweet as the requester."""
    content = require_text(content, CONTENT_REQUIRED)
    now = datetime.now(timezone.utc)
    tweet = {"content": content, "owner": requester.id, "createdAt": now, "updatedAt": now}
    result = get_database()[TWEETS].insert_one(tweet)
    if not result.acknowledged:
        raise InternalError("Failed to create tweet")
    tweet["_id"] = result.inserted_id
    return tweet


def user_tweets_pipeline(user_id) -> list[dict]:
    return [
        {"$match": {"owner": user_id}},
        *owner_lookup(),
        join(LIKES, "_id", "tweet", "likes"),
        {"$addFields": {"likesCount": {"$size": "$likes"}}},
        newest_first(),
        {"$project": {"content": 1, "owner": 1, "likesCount": 1, "createdAt": 1}},
    ]


def get_user_tweets(user_id: str) -> list[dict]:
    """All tweets of a user, newest first, with like counts."""
    owner_id = parse_object_id(user_id, "user")
    return list(get_database()[TWEETS].aggregate(user_tweets_pipeline(owner_id)))


def update_tweet(tweet_id: str, content: str | None, requester: Requester) -> dict:
    object_id = parse_object_id(tweet_id, "tweet")
    content = require_text(content, CONTENT_REQUIRED)
    tweets = get_database()[TWEETS]
    fetch_owned(tweets, object_id, requester, "tweet", "update")
    updated = tweets.find_one_and_update(
        {"_id": object_id},
        {"$set": {"content": content, "updatedAt": datetime.now(timezone.utc)}},
        return_document=ReturnDocument.AFTER,
    )
    if updated is None:
        raise NotFoundError("Tweet not found")
    return updated


def delete_tweet(tweet_id: str, requester: Requester) -> None:
    object_id = parse_object_id(tweet_id, "tweet")
    tweets = get_database()[TWEETS]
    fetch_owned(tweets, object_id, requester, "tweet", "delete")
    tweets.delete_one({"_id": object_id})
