"""Upload service — turns stored bytes into a shareable file record."""

import re

from fastapi import Request, UploadFile
from starlette.concurrency import run_in_threadpool

from config import MAX_FILE_SIZE, STORAGE_LIMIT
from logging_config import get_logger
from credentials import MAX_PASSWORD_BYTES, hash_password
from api.files.repositories import files_repository
from api.upload.dto.upload import UploadResponse
from api.upload.services import storage_service

logger = get_logger(__name__)


def parse_size(size_str: str) -> int:
    """Parse size string like '100MB', '1GB' into bytes."""
    if not size_str:
        return 0

    match = re.match(r"^(\d+(?:\.\d+)?)\s*(B|KB|MB|GB|TB)?$", size_str.strip().upper())
    if not match:
        return 0

    value = float(match.group(1))
    unit = match.group(2) or "B"

    multipliers = {
        "B": 1,
        "KB": 1024,
        "MB": 1024**2,
        "GB": 1024**3,
        "TB": 1024**4,
    }

    return int(value * multipliers[unit])


def normalize_password(password: str | None) -> str | None:
    """Map an empty password to None and reject ones bcrypt cannot hold."""
    if not password:
        return None
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


def build_link(base_url: str, file_id: str) -> str:
    return f"{base_url.rstrip('/')}/file/{file_id}"


def register_upload(
    filepath: str,
    filename: str,
    password: str | None = None,
    size: int = 0,
) -> str:
    """Create the record for an already stored file and return its id.

    An empty password is the same as no password: nothing is hashed or stored.
    """
    password_hash = hash_password(password) if password else None
    file_id = files_repository.create(
        filepath=filepath,
        filename=filename,
        password_hash=password_hash,
        size=size,
    )
    logger.info(
        "Stored %s as %s (%d bytes, %s)",
        filename, file_id, size, "protected" if password_hash else "public",
    )
    return file_id


def _available_storage() -> int | None:
    storage_limit = parse_size(STORAGE_LIMIT)
    if not storage_limit:
        return None
    return max(0, storage_limit - files_repository.get_total_storage())


async def _store(chunks, filename: str, password: str | None, base_url: str) -> UploadResponse:
    path, size = await storage_service.write_chunks(
        chunks,
        filename,
        max_size=parse_size(MAX_FILE_SIZE),
        available=await run_in_threadpool(_available_storage),
    )
    try:
        file_id = await run_in_threadpool(
            register_upload, str(path), path.name, password, size
        )
    except Exception:
        storage_service.discard(path)
        raise

    return UploadResponse(
        url=build_link(base_url, file_id),
        id=file_id,
        filename=path.name,
        size=size,
        protected=bool(password),
    )


async def save_upload(
    request: Request,
    filename: str,
    password: str | None = None,
) -> UploadResponse:
    """Stream a raw request body to disk and register it."""
    return await _store(request.stream(), filename, password, str(request.base_url))


async def save_form_upload(
    request: Request,
    file: UploadFile,
    password: str | None = None,
) -> UploadResponse:
    """Store a multipart upload coming from the web page."""

    async def chunks():
        while chunk := await file.read(storage_service.CHUNK_SIZE):
            yield chunk

    return await _store(chunks(), file.filename or "", password, str(request.base_url))
