from fastapi import APIRouter

from vidtube.auth import CurrentUser
from vidtube.models.tweets import TweetRequest
from vidtube.responses import respond
from vidtube.services import tweets as tweets_service

router = APIRouter(prefix="/api/v1/tweets", tags=["tweets"])


@router.post("")
def create_tweet(request: TweetRequest, user: CurrentUser):
    tweet = tweets_service.create_tweet(request.content, user)
    return respond(201, tweet, "Tweet created successfully")


@router.get("/user/{user_id}")
def get_user_tweets(user_id: str, user: CurrentUser):
    return respond(200, tweets_service.get_user_tweets(user_id), "Tweets fetched successfully")


@router.patch("/{tweet_id}")
def update_tweet(tweet_id: str, request: TweetRequest, user: CurrentUser):
    tweet = tweets_service.update_tweet(tweet_id, request.content, user)
    return respond(200, tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}")
def delete_tweet(tweet_id: str, user: CurrentUser):
    tweets_service.delete_tweet(tweet_id, user)
    return respond(200, {}, "Tweet deleted successfully")
