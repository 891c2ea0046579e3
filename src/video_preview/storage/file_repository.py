"""Persistence layer for file_info records."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from sqlalchemy.orm import Session

from ..db.db_models import FileInfoModel
from .storage_models import FileInfo


class FileInfoRepository:
    """Store metadata about files kept by :class:`FileStore`."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def register(
        self,
        *,
        file_id: str,
        name: str,
        internal_name: str,
        size: int,
        mime_type: str,
        extension: str,
        path: Path,
    ) -> FileInfo:
        created_at = datetime.utcnow()
        model = FileInfoModel(
            id=file_id,
            name=name,
            internal_name=internal_name,
            size=size,
            mime_type=mime_type,
            extension=extension,
            path=str(path),
            created_at=created_at,
        )
        with self._session_factory() as session:
            session.add(model)
            session.commit()
        return self._to_domain(model)

    def get(self, file_id: str) -> FileInfo:
        with self._session_factory() as session:
            model = session.get(FileInfoModel, file_id)
            if model is None:
                raise KeyError(f"File '{file_id}' not found")
            return self._to_domain(model)

    def get_path(self, file_id: str) -> Path:
        with self._session_factory() as session:
            model = session.get(FileInfoModel, file_id)
            if model is None:
                raise KeyError(f"File '{file_id}' not found")
            return Path(model.path)

    @staticmethod
    def _to_domain(model: FileInfoModel) -> FileInfo:
        return FileInfo(
            id=model.id,
            name=model.name,
            size=model.size,
            mime_type=model.mime_type,
            extension=model.extension,
            created_at=model.created_at,
        )
