"""Upload controller — handles raw file uploads via PUT."""

from fastapi import APIRouter, HTTPException, Request

from errors import PersistenceError
from api.upload.services import storage_service, upload_service
from api.upload.dto.upload import UploadResponse

router = APIRouter(tags=["Upload"])


@router.put("/{filename:path}", response_model=UploadResponse)
async def upload_file(request: Request, filename: str):
    """Upload a file via streaming PUT request.

    An optional ``X-Password`` header protects the download.
    """
    try:
        filename = storage_service.sanitize_filename(filename)
        password = upload_service.normalize_password(request.headers.get("X-Password"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await upload_service.save_upload(
            request=request,
            filename=filename,
            password=password,
        )
    except ValueError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=503, detail="Storage temporarily unavailable")
