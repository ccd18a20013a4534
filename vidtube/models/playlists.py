from pydantic import BaseModel


class PlaylistRequest(BaseModel):
    name: str | None = None
    description: str | None = None
