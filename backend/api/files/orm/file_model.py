"""File ORM model."""

from sqlalchemy import Column, DateTime, Integer, String, func

from database import Base


class FileModel(Base):
    __tablename__ = "files"

    id = Column(String(32), primary_key=True)
    filename = Column(String, nullable=False)
    filepath = Column(String, nullable=False)
    password_hash = Column(String, nullable=True)
    size = Column(Integer, nullable=False, default=0)
    download_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=func.now())
