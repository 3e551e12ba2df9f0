"""Storage service — writes uploaded bytes to disk and reads them back."""

import os
import shutil
import tempfile
import uuid
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

from config import FILES_DIR
from errors import PersistenceError

CHUNK_SIZE = 1024 * 1024  # 1MB


def sanitize_filename(filename: str) -> str:
    """Strip any directory components from a client supplied filename."""
    name = Path(filename.replace("\\", "/")).name.strip()
    if name in ("", ".", ".."):
        raise ValueError("Invalid filename")
    return name


async def write_chunks(
    chunks: AsyncIterator[bytes],
    filename: str,
    max_size: int = 0,
    available: int | None = None,
) -> tuple[Path, int]:
    """Stream *chunks* into a new file under FILES_DIR.

    ``max_size`` caps the file itself (0 means unlimited) and ``available``
    caps what is left of the overall storage budget (None means unlimited).
    Raises ValueError when either limit is exceeded.
    Returns the final path and the number of bytes written.
    """
    name = sanitize_filename(filename)
    try:
        tmp = tempfile.NamedTemporaryFile(delete=False, dir=str(FILES_DIR))
    except OSError as e:
        raise PersistenceError(f"Could not open upload buffer: {e}") from e

    file_dir = None
    try:
        size = 0
        with tmp:
            async for chunk in chunks:
                size += len(chunk)
                if max_size and size > max_size:
                    raise ValueError(f"File exceeds max size of {max_size} bytes")
                if available is not None and size > available:
                    raise ValueError("Storage limit would be exceeded")
                tmp.write(chunk)

        file_dir = FILES_DIR / uuid.uuid4().hex
        file_dir.mkdir(parents=True)
        final_path = file_dir / name
        shutil.move(tmp.name, str(final_path))
        return final_path, size
    except BaseException as e:
        # Nothing stays on disk after a failed or abandoned upload
        _unlink(tmp.name)
        if file_dir is not None:
            shutil.rmtree(file_dir, ignore_errors=True)
        if isinstance(e, OSError):
            raise PersistenceError(f"Could not store upload: {e}") from e
        raise


def iter_file(path: Path, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            yield chunk


def discard(path: Path) -> None:
    """Remove a stored file along with its directory."""
    if path.parent.exists() and path.parent != FILES_DIR:
        shutil.rmtree(path.parent, ignore_errors=True)


def _unlink(name: str) -> None:
    if os.path.exists(name):
        os.unlink(name)
