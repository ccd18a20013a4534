from bson import ObjectId

from vidtube.exceptions import BadRequestError, ForbiddenError, NotFoundError
from vidtube.models.common import Requester


def parse_object_id(value: str | None, label: str) -> ObjectId:
    """Convert an external identifier to an ObjectId or raise 400 "Invalid <label> ID"."""
    if not value or not ObjectId.is_valid(value):
        raise BadRequestError(f"Invalid {label} ID")
    return ObjectId(value)


def require_text(value: str | None, message: str) -> str:
    """Return value unchanged; blank or missing values raise 400 with message."""
    if value is None or not value.strip():
        raise BadRequestError(message)
    return value


def ensure_owner(document: dict, requester: Requester, action: str, resource: str) -> None:
    if document.get("owner") != requester.id:
        raise ForbiddenError(f"You are not authorized to {action} this {resource}")


def fetch_owned(collection, document_id: ObjectId, requester: Requester, resource: str, action: str) -> dict:
    """Load a document, 404 when absent, 403 when the requester does not own it."""
    document = collection.find_one({"_id": document_id})
    if document is None:
        raise NotFoundError(f"{resource.capitalize()} not found")
    ensure_owner(document, requester, action, resource)
    return document
