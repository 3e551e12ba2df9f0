"""Retrieval gate — decides whether a download request may proceed.

The gate only looks at the record and the submitted password. It never
touches the store; counting a download is left to the transfer step.
"""

from enum import Enum

from credentials import verify_password
from api.files.dto.file import FileRecord


class GateState(str, Enum):
    UNPROTECTED = "unprotected"
    AWAITING_PASSWORD = "awaiting_password"
    APPROVED = "approved"
    REJECTED = "rejected"


def evaluate(record: FileRecord, password: str | None = None) -> GateState:
    """Return APPROVED, AWAITING_PASSWORD or REJECTED for this request.

    ``password`` is None when the request carried no password at all; an
    empty string counts as a submitted (wrong) password. Raises
    InvalidCredentialFormat if the stored hash is corrupt.
    """
    state = _initial_state(record, password)

    if state is GateState.UNPROTECTED:
        return GateState.APPROVED
    if state is GateState.AWAITING_PASSWORD:
        return state

    if verify_password(password, record.password_hash):
        return GateState.APPROVED
    return GateState.REJECTED


def _initial_state(record: FileRecord, password: str | None) -> GateState | None:
    if not record.has_password:
        return GateState.UNPROTECTED
    if password is None:
        return GateState.AWAITING_PASSWORD
    return None
