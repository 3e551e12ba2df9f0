"""Files service — read-only views over stored records."""

from api.files.dto.file import FileInfo
from api.files.repositories import files_repository


def get_file_info(file_id: str) -> FileInfo | None:
    record = files_repository.get_by_id(file_id)
    return FileInfo.from_record(record) if record else None
