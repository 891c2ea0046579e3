"""Host-facing plugin façade bundling the lifecycle and interception hooks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import BinaryIO

from .posts.post_interceptor import PostInterceptor
from .posts.post_models import MessagePost
from .preview.preview_scheduler import PreviewScheduler
from .storage.storage_models import FileInfo
from .uploads.upload_interceptor import UploadInterceptor
from .uploads.upload_models import UploadOutcome

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VideoPreviewPlugin:
    upload_interceptor: UploadInterceptor
    post_interceptor: PostInterceptor
    scheduler: PreviewScheduler
    log: logging.Logger = field(default_factory=lambda: logger)

    def on_activate(self) -> None:
        self.log.info(
            "plugin.activated",
            extra={"preview_workers": self.scheduler.max_workers},
        )

    def on_deactivate(self) -> None:
        self.scheduler.shutdown(wait=False, cancel_pending=True)
        self.log.info("plugin.deactivated")

    def file_will_be_uploaded(
        self, info: FileInfo, source: BinaryIO, sink: BinaryIO
    ) -> UploadOutcome:
        return self.upload_interceptor.file_will_be_uploaded(info, source, sink)

    def message_will_be_posted(self, post: MessagePost) -> MessagePost:
        return self.post_interceptor.message_will_be_posted(post)
