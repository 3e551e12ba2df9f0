"""File Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel


class FileRecord(BaseModel):
    """A stored file and its access state, as handed between services."""

    id: str
    filename: str
    filepath: str
    password_hash: str | None = None
    size: int = 0
    download_count: int = 0
    created_at: datetime | None = None

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None


class FileInfo(BaseModel):
    """Public metadata for a shared file.

    Password protected files only reveal that they are protected.
    """

    id: str
    protected: bool
    filename: str | None = None
    size: int | None = None
    download_count: int | None = None
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileInfo":
        if record.has_password:
            return cls(id=record.id, protected=True)
        return cls(
            id=record.id,
            filename=record.filename,
            size=record.size,
            protected=record.has_password,
            download_count=record.download_count,
            created_at=record.created_at,
        )
