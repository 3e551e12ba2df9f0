"""Test configuration — isolated data directory and a cheap bcrypt work factor.

The environment has to be set before any application module is imported,
since configuration is read at import time.
"""

import os
import tempfile

os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="padlock-tests-")
os.environ.pop("DATABASE_URL", None)
os.environ["PADLOCK_BCRYPT_ROUNDS"] = "4"

import main  # noqa: E402,F401  creates the schema
