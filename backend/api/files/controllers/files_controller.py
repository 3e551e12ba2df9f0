"""Files controller — public metadata for shared files."""

from fastapi import APIRouter, HTTPException

from errors import PersistenceError
from api.files.dto.file import FileInfo
from api.files.services import files_service

router = APIRouter(prefix="/api/files", tags=["Files"])


@router.get("/{file_id}", response_model=FileInfo)
def get_file(file_id: str):
    try:
        file = files_service.get_file_info(file_id)
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Storage temporarily unavailable")
    if not file:
        raise HTTPException(status_code=404, detail="File not found")
    return file
