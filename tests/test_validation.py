import pytest
from unittest.mock import MagicMock

from bson import ObjectId

from vidtube.exceptions import BadRequestError, ForbiddenError, NotFoundError
from vidtube.validation import ensure_owner, fetch_owned, parse_object_id, require_text
from conftest import OTHER_USER_ID, TWEET_DOC, TWEET_ID


class TestParseObjectId:
    def test_valid(self):
        assert parse_object_id(str(TWEET_ID), "tweet") == TWEET_ID

    @pytest.mark.parametrize("value", [None, "", "abc", "zzzzzzzzzzzzzzzzzzzzzzzz", "65b00000000000000000000"])
    def test_invalid(self, value):
        with pytest.raises(BadRequestError, match="Invalid tweet ID") as exc_info:
            parse_object_id(value, "tweet")
        assert exc_info.value.status_code == 400


class TestRequireText:
    def test_returns_value_untouched(self):
        assert require_text(" hi ", "x") == " hi "

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank(self, value):
        with pytest.raises(BadRequestError, match="name is required"):
            require_text(value, "name is required")


class TestOwnership:
    def test_owner_passes(self, requester):
        ensure_owner(TWEET_DOC, requester, "update", "tweet")

    def test_other_user(self, requester):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_owner({**TWEET_DOC, "owner": OTHER_USER_ID}, requester, "update", "tweet")
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "You are not authorized to update this tweet"

    def test_fetch_owned_missing(self, requester):
        collection = MagicMock()
        collection.find_one.return_value = None
        with pytest.raises(NotFoundError, match="Video not found"):
            fetch_owned(collection, ObjectId(), requester, "video", "delete")

    def test_fetch_owned_returns_document(self, requester):
        collection = MagicMock()
        collection.find_one.return_value = TWEET_DOC
        assert fetch_owned(collection, TWEET_ID, requester, "tweet", "delete") is TWEET_DOC
        collection.find_one.assert_called_once_with({"_id": TWEET_ID})
