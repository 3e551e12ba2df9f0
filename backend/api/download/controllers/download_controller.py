"""Download controller — password challenge and file streaming."""

import mimetypes
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool

from errors import InvalidCredentialFormat, PersistenceError, RetrievalFailed
from logging_config import get_logger
from api.download.services import download_service
from api.download.services.download_service import Retrieval, RetrievalOutcome
from api.pages.controllers.pages_controller import templates
from api.upload.services import storage_service

router = APIRouter(tags=["Download"])

logger = get_logger(__name__)


def _content_disposition(filename: str) -> str:
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _stream(retrieval: Retrieval) -> StreamingResponse:
    record = retrieval.record
    content_type, _ = mimetypes.guess_type(record.filename)
    if not content_type:
        content_type = "application/octet-stream"

    return StreamingResponse(
        storage_service.iter_file(retrieval.path),
        media_type=content_type,
        headers={
            "Content-Disposition": _content_disposition(record.filename),
            "Content-Length": str(retrieval.path.stat().st_size),
        },
    )


def _handle(request: Request, file_id: str, password: str | None):
    try:
        retrieval = download_service.retrieve(file_id, password)
    except PersistenceError as e:
        logger.error("Store unavailable while retrieving %s: %s", file_id, e)
        raise HTTPException(status_code=503, detail="Storage temporarily unavailable")
    except InvalidCredentialFormat:
        logger.error("Corrupt password hash on %s", file_id)
        raise HTTPException(status_code=500, detail="File cannot be retrieved")
    except RetrievalFailed as e:
        raise HTTPException(status_code=500, detail=str(e))

    if retrieval.outcome is RetrievalOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail="File not found")

    if retrieval.outcome is RetrievalOutcome.APPROVED:
        return _stream(retrieval)

    return templates.TemplateResponse(
        request,
        "password.html",
        {"file_id": file_id, "error": retrieval.password_failed},
        status_code=401 if retrieval.password_failed else 200,
    )


@router.get("/file/{file_id}")
def download_file(request: Request, file_id: str):
    """Download a file, or ask for its password."""
    return _handle(request, file_id, None)


@router.post("/file/{file_id}")
async def download_protected_file(request: Request, file_id: str):
    """Download a file with the password submitted from the challenge page.

    The raw form value is used so that an empty field counts as a submitted
    password rather than a missing one.
    """
    form = await request.form()
    password = form.get("password")
    if not isinstance(password, str):
        password = None
    return await run_in_threadpool(_handle, request, file_id, password)
