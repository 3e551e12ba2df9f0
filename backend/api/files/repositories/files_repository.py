"""Files repository — data access layer."""

import re
import secrets

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database import SessionLocal
from errors import PersistenceError
from api.files.orm.file_model import FileModel
from api.files.dto.file import FileRecord

ID_BYTES = 12  # 16 URL-safe characters
ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16}$")
MAX_ID_ATTEMPTS = 5


def _get_session():
    return SessionLocal()


def _model_to_dto(model: FileModel) -> FileRecord:
    return FileRecord(
        id=model.id,
        filename=model.filename,
        filepath=model.filepath,
        password_hash=model.password_hash,
        size=model.size or 0,
        download_count=model.download_count or 0,
        created_at=model.created_at,
    )


def generate_id() -> str:
    return secrets.token_urlsafe(ID_BYTES)


def is_valid_id(file_id: str) -> bool:
    return bool(file_id) and ID_PATTERN.match(file_id) is not None


def create(
    filepath: str,
    filename: str,
    password_hash: str | None = None,
    size: int = 0,
) -> str:
    """Persist a new record and return its freshly allocated id."""
    if not filepath:
        raise ValueError("filepath must not be empty")
    if not filename:
        raise ValueError("filename must not be empty")

    for _ in range(MAX_ID_ATTEMPTS):
        file_id = generate_id()
        try:
            with _get_session() as session:
                session.add(
                    FileModel(
                        id=file_id,
                        filename=filename,
                        filepath=filepath,
                        password_hash=password_hash,
                        size=size,
                        download_count=0,
                    )
                )
                session.commit()
            return file_id
        except IntegrityError:
            # Id already taken, draw another
            continue
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not create file record: {e}") from e

    raise PersistenceError("Could not allocate a unique file id")


def get_by_id(file_id: str) -> FileRecord | None:
    """Return the record, or None when the id is unknown or malformed."""
    if not is_valid_id(file_id):
        return None
    try:
        with _get_session() as session:
            model = session.get(FileModel, file_id)
            return _model_to_dto(model) if model else None
    except SQLAlchemyError as e:
        raise PersistenceError(f"Could not read file record: {e}") from e


def increment_download(file_id: str) -> bool:
    """Atomically add one to the download counter.

    Returns False when the record no longer exists.
    """
    try:
        with _get_session() as session:
            result = session.execute(
                update(FileModel)
                .where(FileModel.id == file_id)
                .values(download_count=FileModel.download_count + 1)
            )
            session.commit()
            return result.rowcount > 0
    except SQLAlchemyError as e:
        raise PersistenceError(f"Could not update download count: {e}") from e


def get_total_storage() -> int:
    try:
        with _get_session() as session:
            total = session.query(func.sum(FileModel.size)).scalar()
            return total or 0
    except SQLAlchemyError as e:
        raise PersistenceError(f"Could not compute storage usage: {e}") from e
