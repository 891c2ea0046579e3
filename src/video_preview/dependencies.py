"""Dependency wiring helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .config import AppConfig
from .hooks.hooks_api import router as hooks_router
from .plugin import VideoPreviewPlugin
from .posts.post_interceptor import PostInterceptor
from .preview.preview_job import PreviewJob
from .preview.preview_repository import PreviewLinkRepository
from .preview.preview_scheduler import PreviewScheduler
from .preview.transcoder import FfmpegTranscoder
from .settings.settings_api import router as settings_router
from .settings.settings_repository import SettingsRepository
from .settings.settings_service import ConfigurationProvider
from .storage.file_repository import FileInfoRepository
from .storage.file_store import FileStore
from .uploads.upload_interceptor import UploadInterceptor
from .video.video_api import router as video_router


def build_plugin(
    config: AppConfig,
    *,
    transcoder: FfmpegTranscoder | None = None,
) -> tuple[VideoPreviewPlugin, FileStore, PreviewLinkRepository, ConfigurationProvider]:
    """Assemble storage, configuration and the preview pipeline."""
    file_store = FileStore(config.media_paths, FileInfoRepository(config.session_factory))
    preview_links = PreviewLinkRepository(config.session_factory)
    configuration_provider = ConfigurationProvider(SettingsRepository(config.session_factory))

    limits = config.preview_limits
    preview_job = PreviewJob(
        storage=file_store,
        links=preview_links,
        transcoder=transcoder
        or FfmpegTranscoder(
            binary=limits.ffmpeg_binary,
            timeout_seconds=limits.transcode_timeout_seconds,
        ),
        temp_root=config.media_paths.temp,
    )
    scheduler = PreviewScheduler(
        runner=preview_job,
        links=preview_links,
        max_workers=limits.max_workers,
    )
    plugin = VideoPreviewPlugin(
        upload_interceptor=UploadInterceptor(configuration_provider),
        post_interceptor=PostInterceptor(
            storage=file_store,
            config_provider=configuration_provider,
            scheduler=scheduler,
        ),
        scheduler=scheduler,
    )
    return plugin, file_store, preview_links, configuration_provider


def include_routers(
    app: FastAPI,
    config: AppConfig,
    *,
    transcoder: FfmpegTranscoder | None = None,
) -> None:
    """Mount module routers and attach services."""
    plugin, file_store, preview_links, configuration_provider = build_plugin(
        config, transcoder=transcoder
    )

    app.state.config = config
    app.state.plugin = plugin
    app.state.file_store = file_store
    app.state.preview_links = preview_links
    app.state.configuration_provider = configuration_provider

    app.include_router(hooks_router)
    app.include_router(video_router)
    app.include_router(settings_router)
