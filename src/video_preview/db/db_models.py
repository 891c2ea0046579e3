"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base declarative class."""


class FileInfoModel(Base):
    __tablename__ = "file_info"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    internal_name: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    extension: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    path: Mapped[str] = mapped_column(String(512), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class SettingModel(Base):
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_by: Mapped[str | None] = mapped_column(String(64))


class VideoPreviewModel(Base):
    __tablename__ = "video_preview"

    file_id: Mapped[str] = mapped_column(String(64), ForeignKey("file_info.id"), primary_key=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)  # pending|processing|done|failed
    job_id: Mapped[str] = mapped_column(String(64), nullable=False)
    preview_file_id: Mapped[str | None] = mapped_column(String(64), ForeignKey("file_info.id"))
    failure_reason: Mapped[str | None] = mapped_column(String(64))
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
