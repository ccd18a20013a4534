from datetime import datetime

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from vidtube.models.common import ApiResponse

ENCODERS = {
    ObjectId: str,
    datetime: lambda dt: dt.isoformat(),
}


def encode(data):
    """Turn documents and models into JSON-safe values (ObjectId -> hex string)."""
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    return jsonable_encoder(data, custom_encoder=ENCODERS)


def respond(status_code: int, data, message: str) -> JSONResponse:
    body = ApiResponse(status_code=status_code, data=encode(data), message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))
