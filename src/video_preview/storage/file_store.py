"""Filesystem-backed file storage."""

from __future__ import annotations

import logging
import mimetypes
import shutil
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from ..config import MediaPaths
from ..exceptions import StorageError
from .file_repository import FileInfoRepository
from .storage_models import FileInfo, file_extension


@dataclass(slots=True)
class FileStore:
    """Store raw bytes by opaque id and expose their metadata.

    Lookups of unknown ids raise ``KeyError``; I/O and database failures are
    wrapped in :class:`StorageError`.
    """

    paths: MediaPaths
    repo: FileInfoRepository
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def file_dir(self, file_id: str) -> Path:
        return self.paths.files / file_id

    def get_metadata(self, file_id: str) -> FileInfo:
        try:
            return self.repo.get(file_id)
        except SQLAlchemyError as exc:
            raise StorageError(f"Metadata lookup failed for '{file_id}'") from exc

    def get_bytes(self, file_id: str) -> bytes:
        try:
            path = self.repo.get_path(file_id)
        except SQLAlchemyError as exc:
            raise StorageError(f"Metadata lookup failed for '{file_id}'") from exc
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Cannot read bytes of '{file_id}': {exc}") from exc

    def put_bytes(
        self,
        data: bytes,
        display_name: str,
        internal_name: str,
        *,
        mime_type: str | None = None,
    ) -> FileInfo:
        file_id = uuid.uuid4().hex
        directory = self.file_dir(file_id)
        target = directory / self._sanitize(internal_name)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            shutil.rmtree(directory, ignore_errors=True)
            raise StorageError(f"Cannot write '{internal_name}': {exc}") from exc

        resolved_mime = mime_type or mimetypes.guess_type(display_name)[0] or "application/octet-stream"
        try:
            info = self.repo.register(
                file_id=file_id,
                name=display_name,
                internal_name=internal_name,
                size=len(data),
                mime_type=resolved_mime,
                extension=file_extension(display_name),
                path=target,
            )
        except SQLAlchemyError as exc:
            shutil.rmtree(directory, ignore_errors=True)
            raise StorageError(f"Cannot register '{internal_name}'") from exc
        self.log.info(
            "storage.file.stored",
            extra={"file_id": file_id, "file_name": display_name, "size_bytes": len(data)},
        )
        return info

    @staticmethod
    def _sanitize(name: str) -> str:
        return Path(name).name or "upload.bin"
