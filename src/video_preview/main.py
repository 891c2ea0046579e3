"""FastAPI application entry point."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging
from .preview.transcoder import FfmpegTranscoder


def create_app(
    config: AppConfig | None = None,
    *,
    transcoder: FfmpegTranscoder | None = None,
) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        plugin = app.state.plugin
        plugin.on_activate()
        try:
            yield
        finally:
            plugin.on_deactivate()
            cfg.engine.dispose()

    app = FastAPI(title="Video Preview", lifespan=lifespan)
    include_routers(app, cfg, transcoder=transcoder)
    return app
