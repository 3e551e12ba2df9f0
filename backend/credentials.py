"""Password hashing for protected downloads (bcrypt)."""

import bcrypt

from config import BCRYPT_ROUNDS
from errors import InvalidCredentialFormat

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash *password* with a fresh random salt."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check *password* against a stored bcrypt hash.

    Returns False on mismatch. Raises InvalidCredentialFormat when *hashed*
    is not a usable bcrypt hash.
    """
    if not hashed or not hashed.startswith(("$2a$", "$2b$", "$2y$")):
        raise InvalidCredentialFormat("Stored password hash is not a bcrypt hash")

    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        # Could never have been hashed, so it cannot match
        return False

    try:
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
    except ValueError as e:
        raise InvalidCredentialFormat(str(e)) from e
