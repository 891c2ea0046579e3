"""Validate video uploads before they are stored."""

from __future__ import annotations

import dataclasses
import logging
import shutil
from dataclasses import dataclass, field
from typing import BinaryIO

from ..settings.settings_models import PluginConfiguration
from ..settings.settings_service import ConfigurationProvider
from ..storage.storage_models import FileInfo
from ..video.video_validation import exceeds_size_limit, is_supported_video, video_mime_type
from .upload_models import UploadOutcome

logger = logging.getLogger(__name__)

SIZE_LIMIT_REASON = "Video file size exceeds the maximum allowed size"
COPY_FAILED_REASON = "Failed to copy the video file"


@dataclass(slots=True)
class UploadInterceptor:
    """Reject oversized videos and tag accepted ones with a MIME type."""

    config_provider: ConfigurationProvider
    log: logging.Logger = field(default_factory=lambda: logger)

    def file_will_be_uploaded(
        self,
        info: FileInfo,
        source: BinaryIO,
        sink: BinaryIO,
        *,
        config: PluginConfiguration | None = None,
    ) -> UploadOutcome:
        snapshot = config or self.config_provider.load()
        if not is_supported_video(info.name, snapshot):
            return UploadOutcome(info=info)

        if exceeds_size_limit(info.size, snapshot):
            self.log.warning(
                "upload.video.rejected",
                extra={
                    "file_name": info.name,
                    "size_bytes": info.size,
                    "limit_bytes": snapshot.max_file_size_bytes,
                },
            )
            return UploadOutcome(info=info, rejection_reason=SIZE_LIMIT_REASON)

        try:
            shutil.copyfileobj(source, sink)
        except OSError as exc:
            self.log.error(
                "upload.video.copy_failed",
                extra={"file_name": info.name, "error": str(exc)},
            )
            return UploadOutcome(info=info, rejection_reason=f"{COPY_FAILED_REASON}: {exc}")

        accepted = dataclasses.replace(info, mime_type=video_mime_type(info.name))
        self.log.info(
            "upload.video.accepted",
            extra={"file_name": info.name, "size_bytes": info.size, "mime_type": accepted.mime_type},
        )
        return UploadOutcome(info=accepted, relayed=True)
