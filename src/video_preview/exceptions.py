"""Exceptions raised by the video preview pipeline."""

from __future__ import annotations

__all__ = [
    "VideoPreviewError",
    "ConfigLoadError",
    "StorageError",
    "TranscodeError",
    "SchedulerClosedError",
]


class VideoPreviewError(Exception):
    """Base class for service specific errors."""


class ConfigLoadError(VideoPreviewError):
    """Raised when the stored plugin configuration cannot be read."""


class StorageError(VideoPreviewError):
    """Raised when file bytes cannot be read from or written to storage."""


class TranscodeError(VideoPreviewError):
    """Raised when ffmpeg fails to produce a preview frame."""

    def __init__(self, message: str, *, stderr: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class SchedulerClosedError(VideoPreviewError):
    """Raised when a preview job is submitted after shutdown."""
