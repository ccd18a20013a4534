import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from vidtube.exceptions import ForbiddenError, NotFoundError
from conftest import AUTH_HEADERS, TWEET_DOC, TWEET_ID, USER_ID


@pytest.fixture
def client(mocker):
    mocker.patch("vidtube.routers.tweets.tweets_service")
    from vidtube.main import api
    return TestClient(api)


@pytest.fixture
def mock_svc(mocker):
    return mocker.patch("vidtube.routers.tweets.tweets_service")


class TestCreateTweet:
    def test_returns_201_envelope(self, client, mock_svc):
        mock_svc.create_tweet.return_value = TWEET_DOC
        resp = client.post("/api/v1/tweets", json={"content": "hello world"}, headers=AUTH_HEADERS)
        assert resp.status_code == 201
        body = resp.json()
        assert body["statusCode"] == 201
        assert body["success"] is True
        assert body["message"] == "Tweet created successfully"
        assert body["data"]["_id"] == str(TWEET_ID)
        assert body["data"]["owner"] == str(USER_ID)
        assert body["data"]["createdAt"].startswith("2025-01-01T12:00:00")

    def test_forwards_requester(self, client, mock_svc):
        mock_svc.create_tweet.return_value = TWEET_DOC
        client.post("/api/v1/tweets", json={"content": "hi"}, headers=AUTH_HEADERS)
        content, user = mock_svc.create_tweet.call_args[0]
        assert content == "hi"
        assert user.id == USER_ID

    def test_requires_identity(self, client, mock_svc):
        resp = client.post("/api/v1/tweets", json={"content": "hi"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Unauthorized request"
        mock_svc.create_tweet.assert_not_called()

    def test_malformed_identity(self, client, mock_svc):
        resp = client.post("/api/v1/tweets", json={"content": "hi"}, headers={"X-User-Id": "bogus"})
        assert resp.status_code == 401


class TestGetUserTweets:
    def test_returns_list(self, client, mock_svc):
        mock_svc.get_user_tweets.return_value = [{"_id": TWEET_ID, "content": "x", "likesCount": 1}]
        resp = client.get(f"/api/v1/tweets/user/{USER_ID}", headers=AUTH_HEADERS)
        assert resp.status_code == 200
        assert resp.json()["data"][0]["likesCount"] == 1
        mock_svc.get_user_tweets.assert_called_once_with(str(USER_ID))


class TestUpdateAndDelete:
    def test_update(self, client, mock_svc):
        mock_svc.update_tweet.return_value = {**TWEET_DOC, "content": "new"}
        resp = client.patch(f"/api/v1/tweets/{TWEET_ID}", json={"content": "new"}, headers=AUTH_HEADERS)
        assert resp.status_code == 200
        assert resp.json()["message"] == "Tweet updated successfully"

    def test_delete_returns_empty_object(self, client, mock_svc):
        resp = client.delete(f"/api/v1/tweets/{TWEET_ID}", headers=AUTH_HEADERS)
        assert resp.status_code == 200
        assert resp.json()["data"] == {}

    def test_forbidden_maps_to_403(self, client, mock_svc):
        mock_svc.delete_tweet.side_effect = ForbiddenError("You are not authorized to delete this tweet")
        resp = client.delete(f"/api/v1/tweets/{TWEET_ID}", headers=AUTH_HEADERS)
        assert resp.status_code == 403
        body = resp.json()
        assert body == {
            "statusCode": 403,
            "data": None,
            "message": "You are not authorized to delete this tweet",
            "success": False,
            "errors": [],
        }

    def test_not_found_maps_to_404(self, client, mock_svc):
        mock_svc.update_tweet.side_effect = NotFoundError("Tweet not found")
        resp = client.patch(f"/api/v1/tweets/{TWEET_ID}", json={"content": "new"}, headers=AUTH_HEADERS)
        assert resp.status_code == 404


class TestThroughService:
    """Router plus real service, storage mocked."""

    def test_whitespace_content(self, api_client, mock_db):
        resp = api_client.post("/api/v1/tweets", json={"content": "   "}, headers=AUTH_HEADERS)
        assert resp.status_code == 400
        assert "content is required" in resp.json()["message"]
        mock_db.__getitem__.assert_not_called()

    def test_missing_content(self, api_client, mock_db):
        resp = api_client.post("/api/v1/tweets", json={}, headers=AUTH_HEADERS)
        assert resp.status_code == 400

    def test_stores_content_exactly(self, api_client, collection):
        collection.insert_one.return_value = MagicMock(acknowledged=True, inserted_id=TWEET_ID)
        resp = api_client.post("/api/v1/tweets", json={"content": "hi"}, headers=AUTH_HEADERS)
        assert resp.status_code == 201
        assert resp.json()["data"]["content"] == "hi"
        assert collection.insert_one.call_args[0][0]["content"] == "hi"

    def test_malformed_id_never_hits_storage(self, api_client, mock_db):
        resp = api_client.delete("/api/v1/tweets/not-an-id", headers=AUTH_HEADERS)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid tweet ID"
        mock_db.__getitem__.assert_not_called()
