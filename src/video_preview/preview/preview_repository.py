"""Persistence layer for video_preview records."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db.db_models import VideoPreviewModel
from .preview_models import PreviewFailureReason, PreviewLink, PreviewStatus


class PreviewLinkRepository:
    """Track preview job status and the resulting preview file per video.

    One record per source video. Submitting a job (``mark_pending``) claims the
    record; later updates from any other job are ignored.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def mark_pending(self, file_id: str, job_id: str) -> bool:
        return self._upsert(file_id, job_id=job_id, status=PreviewStatus.PENDING)

    def mark_processing(self, file_id: str, job_id: str) -> bool:
        """Return False when a newer job has claimed the record."""
        return self._upsert(file_id, job_id=job_id, status=PreviewStatus.PROCESSING)

    def mark_done(self, file_id: str, job_id: str, preview_file_id: str) -> bool:
        return self._upsert(
            file_id,
            job_id=job_id,
            status=PreviewStatus.DONE,
            preview_file_id=preview_file_id,
        )

    def mark_failed(
        self, file_id: str, job_id: str, reason: PreviewFailureReason | str
    ) -> bool:
        return self._upsert(
            file_id,
            job_id=job_id,
            status=PreviewStatus.FAILED,
            failure_reason=str(reason),
        )

    def get(self, file_id: str) -> PreviewLink:
        with self._session_factory() as session:
            model = session.get(VideoPreviewModel, file_id)
            if model is None:
                raise KeyError(f"No preview recorded for '{file_id}'")
            return self._to_domain(model)

    def _upsert(
        self,
        file_id: str,
        *,
        job_id: str,
        status: PreviewStatus,
        preview_file_id: str | None = None,
        failure_reason: str | None = None,
    ) -> bool:
        try:
            return self._write(file_id, job_id, status, preview_file_id, failure_reason)
        except IntegrityError:
            # a concurrent job inserted the row first; retry as an update
            return self._write(file_id, job_id, status, preview_file_id, failure_reason)

    def _write(
        self,
        file_id: str,
        job_id: str,
        status: PreviewStatus,
        preview_file_id: str | None,
        failure_reason: str | None,
    ) -> bool:
        with self._session_factory() as session:
            model = session.get(VideoPreviewModel, file_id)
            if model is None:
                model = VideoPreviewModel(file_id=file_id)
                session.add(model)
            elif model.job_id != job_id and status is not PreviewStatus.PENDING:
                return False
            model.job_id = job_id
            model.status = status.value
            model.preview_file_id = preview_file_id
            model.failure_reason = failure_reason
            model.updated_at = datetime.utcnow()
            session.commit()
        return True

    @staticmethod
    def _to_domain(model: VideoPreviewModel) -> PreviewLink:
        return PreviewLink(
            file_id=model.file_id,
            status=PreviewStatus(model.status),
            job_id=model.job_id,
            preview_file_id=model.preview_file_id,
            failure_reason=model.failure_reason,
            updated_at=model.updated_at,
        )
