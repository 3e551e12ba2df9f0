"""Shared helpers for the test suite."""

import uuid
from pathlib import Path

from config import FILES_DIR


def store_file(name: str = "report.pdf", content: bytes = b"%PDF-1.4 test") -> Path:
    """Write *content* where the byte store would have put it."""
    file_dir = FILES_DIR / uuid.uuid4().hex
    file_dir.mkdir(parents=True)
    path = file_dir / name
    path.write_bytes(content)
    return path
