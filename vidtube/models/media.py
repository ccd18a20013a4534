from pydantic import BaseModel


class UploadResult(BaseModel):
    url: str
    public_id: str | None = None
    resource_type: str | None = None
    duration: float = 0
