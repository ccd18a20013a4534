from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, computed_field


class ApiResponse(BaseModel):
    """Success envelope shared by every endpoint."""

    status_code: int = Field(serialization_alias="statusCode")
    data: Any = None
    message: str = "Success"

    @computed_field
    @property
    def success(self) -> bool:
        return self.status_code < 400


class Requester(BaseModel):
    """Authenticated user on whose behalf a request runs."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    id: ObjectId


class ToggleResult(BaseModel):
    is_liked: bool = Field(serialization_alias="isLiked")


class Page(BaseModel):
    docs: list[dict]
    total_docs: int = Field(serialization_alias="totalDocs")
    limit: int
    page: int
    total_pages: int = Field(serialization_alias="totalPages")
    paging_counter: int = Field(serialization_alias="pagingCounter")
    has_prev_page: bool = Field(serialization_alias="hasPrevPage")
    has_next_page: bool = Field(serialization_alias="hasNextPage")
    prev_page: int | None = Field(default=None, serialization_alias="prevPage")
    next_page: int | None = Field(default=None, serialization_alias="nextPage")
