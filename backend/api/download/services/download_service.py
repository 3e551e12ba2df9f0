"""Download service — runs the retrieval gate and records transfers."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from errors import PersistenceError, RetrievalFailed
from logging_config import get_logger
from api.download.services import retrieval_gate
from api.download.services.retrieval_gate import GateState
from api.files.dto.file import FileRecord
from api.files.repositories import files_repository

logger = get_logger(__name__)


class RetrievalOutcome(str, Enum):
    NOT_FOUND = "not_found"
    AWAITING_PASSWORD = "awaiting_password"
    REJECTED = "rejected"
    APPROVED = "approved"


@dataclass(frozen=True)
class Retrieval:
    outcome: RetrievalOutcome
    record: FileRecord | None = None
    path: Path | None = None

    @property
    def password_failed(self) -> bool:
        return self.outcome is RetrievalOutcome.REJECTED


_GATE_OUTCOMES = {
    GateState.AWAITING_PASSWORD: RetrievalOutcome.AWAITING_PASSWORD,
    GateState.REJECTED: RetrievalOutcome.REJECTED,
}


def retrieve(file_id: str, password: str | None = None) -> Retrieval:
    """Look up *file_id*, check the password and, if allowed, record the download.

    Only an APPROVED retrieval carries a path, and by then the counter has
    already been incremented.
    """
    record = files_repository.get_by_id(file_id)
    if record is None:
        return Retrieval(RetrievalOutcome.NOT_FOUND)

    decision = retrieval_gate.evaluate(record, password)
    if decision is not GateState.APPROVED:
        if decision is GateState.REJECTED:
            logger.warning("Incorrect password for %s", record.id)
        return Retrieval(_GATE_OUTCOMES[decision], record=record)

    path = transfer(record)
    return Retrieval(RetrievalOutcome.APPROVED, record=record, path=path)


def transfer(record: FileRecord) -> Path:
    """Count the download and return the path to stream.

    Nothing may be delivered unless the counter was updated.
    """
    path = Path(record.filepath)
    if not path.is_file():
        logger.error("Stored content missing for %s at %s", record.id, path)
        raise RetrievalFailed("Stored file is missing")

    try:
        updated = files_repository.increment_download(record.id)
    except PersistenceError as e:
        logger.error("Could not record download of %s: %s", record.id, e)
        raise RetrievalFailed("Could not record download") from e

    if not updated:
        logger.error("Record %s vanished before its download was recorded", record.id)
        raise RetrievalFailed("File record no longer exists")

    logger.info("Download of %s (%s) approved", record.id, record.filename)
    return path
