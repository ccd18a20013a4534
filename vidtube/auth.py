from typing import Annotated

from bson import ObjectId
from fastapi import Depends, Request

from vidtube.config import get_settings
from vidtube.exceptions import UnauthorizedError
from vidtube.models.common import Requester


def get_current_user(request: Request) -> Requester:
    """Resolve the requester from the user id the authenticating gateway forwards.

    Token verification happens upstream; this only trusts the forwarded header.
    """
    user_id = request.headers.get(get_settings().user_header)
    if not user_id or not ObjectId.is_valid(user_id):
        raise UnauthorizedError()
    return Requester(id=ObjectId(user_id))


CurrentUser = Annotated[Requester, Depends(get_current_user)]
