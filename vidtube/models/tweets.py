from pydantic import BaseModel


class TweetRequest(BaseModel):
    content: str | None = None
