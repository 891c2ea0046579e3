"""Data structures for preview generation."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class PreviewStatus(StrEnum):
    """Lifecycle statuses for video_preview records."""

    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


class PreviewFailureReason(StrEnum):
    FETCH_FAILED = "fetch_failed"
    WORKSPACE_FAILED = "workspace_failed"
    TRANSCODE_FAILED = "transcode_failed"
    READ_FAILED = "read_failed"
    STORE_FAILED = "store_failed"
    CANCELLED = "cancelled"
    INTERNAL_ERROR = "internal_error"


@dataclass(slots=True)
class PreviewLink:
    """Association between a source video and its preview asset."""

    file_id: str
    status: PreviewStatus
    job_id: str
    preview_file_id: str | None
    failure_reason: str | None
    updated_at: datetime
