"""Application configuration."""

import os
from pathlib import Path

DATA_DIR = Path(os.environ.get("DATA_DIR", str(Path(__file__).parent.parent / "data")))
DATA_DIR.mkdir(parents=True, exist_ok=True)

FILES_DIR = DATA_DIR / "files"
FILES_DIR.mkdir(parents=True, exist_ok=True)

DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{DATA_DIR}/padlock.db")

# Upload limits (size strings like "100MB"; empty disables the limit)
MAX_FILE_SIZE = os.environ.get("PADLOCK_MAX_FILE_SIZE", "100MB").strip()
STORAGE_LIMIT = os.environ.get("PADLOCK_STORAGE_LIMIT", "1GB").strip()

# bcrypt work factor
BCRYPT_ROUNDS = int(os.environ.get("PADLOCK_BCRYPT_ROUNDS", "12"))

LOG_LEVEL = os.environ.get("PADLOCK_LOG_LEVEL", "INFO").strip().upper()
