"""Preview job: turn one stored video into a stored JPEG preview."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import StorageError, TranscodeError
from ..settings.settings_models import PluginConfiguration
from ..storage.storage_models import FileInfo
from .preview_models import PreviewFailureReason
from .preview_repository import PreviewLinkRepository
from .transcoder import FfmpegTranscoder
from .workspace import transcode_workspace

logger = logging.getLogger(__name__)

PREVIEW_MIME_TYPE = "image/jpeg"


class PreviewStorage(Protocol):
    def get_bytes(self, file_id: str) -> bytes: ...

    def put_bytes(
        self,
        data: bytes,
        display_name: str,
        internal_name: str,
        *,
        mime_type: str | None = None,
    ) -> FileInfo: ...


def preview_display_name(source: FileInfo) -> str:
    return f"preview_{source.name}.jpg"


def preview_internal_name(source: FileInfo) -> str:
    return f"preview_{source.id}.jpg"


@dataclass(slots=True)
class PreviewJob:
    """Fetch, transcode and store a preview for a single video.

    Every failure is logged, recorded on the preview link and ends the job;
    nothing is raised to the worker pool. The source file is only read.
    """

    storage: PreviewStorage
    links: PreviewLinkRepository
    transcoder: FfmpegTranscoder
    temp_root: Path
    log: logging.Logger = field(default_factory=lambda: logger)

    def run(self, source: FileInfo, config: PluginConfiguration, job_id: str) -> str | None:
        """Return the preview file id, or ``None`` when the job failed."""
        try:
            return self._run(source, config, job_id)
        except Exception:
            self.log.exception(
                "preview.job.unexpected_error",
                extra={"file_id": source.id, "job_id": job_id},
            )
            self._record_failure(source, job_id, PreviewFailureReason.INTERNAL_ERROR)
            return None

    def _run(self, source: FileInfo, config: PluginConfiguration, job_id: str) -> str | None:
        if not self._record(self.links.mark_processing, source.id, job_id):
            self.log.info(
                "preview.job.superseded",
                extra={"file_id": source.id, "job_id": job_id},
            )
            return None

        try:
            data = self.storage.get_bytes(source.id)
        except (KeyError, StorageError) as exc:
            self.log.error(
                "preview.job.fetch_failed",
                extra={"file_id": source.id, "job_id": job_id, "error": str(exc)},
            )
            self._record_failure(source, job_id, PreviewFailureReason.FETCH_FAILED)
            return None

        try:
            with transcode_workspace(self.temp_root, source.id, job_id, source.name) as workspace:
                try:
                    workspace.input_path.write_bytes(data)
                except OSError as exc:
                    self.log.error(
                        "preview.job.workspace_write_failed",
                        extra={"file_id": source.id, "job_id": job_id, "error": str(exc)},
                    )
                    self._record_failure(source, job_id, PreviewFailureReason.WORKSPACE_FAILED)
                    return None

                try:
                    self.transcoder.extract_frame(
                        workspace.input_path,
                        workspace.output_path,
                        config.preview_duration,
                    )
                except TranscodeError as exc:
                    self.log.error(
                        "preview.job.transcode_failed",
                        extra={
                            "file_id": source.id,
                            "job_id": job_id,
                            "error": str(exc),
                            "stderr": exc.stderr,
                        },
                    )
                    self._record_failure(source, job_id, PreviewFailureReason.TRANSCODE_FAILED)
                    return None

                try:
                    preview_data = workspace.output_path.read_bytes()
                except OSError as exc:
                    self.log.error(
                        "preview.job.read_failed",
                        extra={"file_id": source.id, "job_id": job_id, "error": str(exc)},
                    )
                    self._record_failure(source, job_id, PreviewFailureReason.READ_FAILED)
                    return None
        except OSError as exc:
            self.log.error(
                "preview.job.workspace_failed",
                extra={"file_id": source.id, "job_id": job_id, "error": str(exc)},
            )
            self._record_failure(source, job_id, PreviewFailureReason.WORKSPACE_FAILED)
            return None

        try:
            preview = self.storage.put_bytes(
                preview_data,
                preview_display_name(source),
                preview_internal_name(source),
                mime_type=PREVIEW_MIME_TYPE,
            )
        except StorageError as exc:
            self.log.error(
                "preview.job.store_failed",
                extra={"file_id": source.id, "job_id": job_id, "error": str(exc)},
            )
            self._record_failure(source, job_id, PreviewFailureReason.STORE_FAILED)
            return None

        self._record(self.links.mark_done, source.id, job_id, preview.id)
        self.log.info(
            "preview.generated",
            extra={
                "video_file_id": source.id,
                "preview_file_id": preview.id,
                "job_id": job_id,
            },
        )
        return preview.id

    def _record_failure(
        self, source: FileInfo, job_id: str, reason: PreviewFailureReason
    ) -> None:
        self._record(self.links.mark_failed, source.id, job_id, reason)

    def _record(self, method, file_id: str, job_id: str, *args) -> bool:
        """Write a link update; a database error is logged and does not stop the job."""
        try:
            return method(file_id, job_id, *args)
        except SQLAlchemyError as exc:
            self.log.error(
                "preview.link.write_failed",
                extra={"file_id": file_id, "job_id": job_id, "error": str(exc)},
            )
        return True
