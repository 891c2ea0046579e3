"""Schedule preview generation for videos attached to new posts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from ..exceptions import SchedulerClosedError, StorageError
from ..settings.settings_models import PluginConfiguration
from ..settings.settings_service import ConfigurationProvider
from ..storage.storage_models import FileInfo
from ..video.video_validation import is_supported_video
from .post_models import HAS_VIDEO_PROP, MessagePost

logger = logging.getLogger(__name__)


class MetadataSource(Protocol):
    def get_metadata(self, file_id: str) -> FileInfo: ...


class PreviewSubmitter(Protocol):
    def submit(self, source: FileInfo, config: PluginConfiguration) -> object: ...


@dataclass(slots=True)
class PostInterceptor:
    """Annotate posts carrying videos and hand each video to the scheduler.

    The interceptor never rejects a post and never waits for preview jobs.
    """

    storage: MetadataSource
    config_provider: ConfigurationProvider
    scheduler: PreviewSubmitter
    log: logging.Logger = field(default_factory=lambda: logger)

    def message_will_be_posted(self, post: MessagePost) -> MessagePost:
        if not post.file_ids:
            return post

        config = self.config_provider.load()
        if not config.enable_video_preview:
            return post

        has_video = False
        for file_id in post.file_ids:
            try:
                info = self.storage.get_metadata(file_id)
            except (KeyError, StorageError) as exc:
                self.log.warning(
                    "post.attachment.lookup_failed",
                    extra={"post_id": post.id, "file_id": file_id, "error": str(exc)},
                )
                continue

            if not is_supported_video(info.name, config):
                continue

            has_video = True
            try:
                self.scheduler.submit(info, config)
            except SchedulerClosedError:
                self.log.error(
                    "post.preview.submit_failed",
                    extra={"post_id": post.id, "file_id": file_id},
                )

        if has_video:
            if post.props is None:
                post.props = {}
            post.props[HAS_VIDEO_PROP] = True
        return post
