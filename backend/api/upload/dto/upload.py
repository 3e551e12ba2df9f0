"""Upload Data Transfer Objects."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    url: str
    id: str
    filename: str
    size: int
    protected: bool = False
