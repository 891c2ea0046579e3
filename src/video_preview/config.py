"""Application configuration builder."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_CONFIGURATION: dict[str, Any] = {
    "EnableVideoPreview": True,
    "SupportedFormats": "mp4,mov,avi,mkv,webm",
    "MaxFileSize": 100,
    "PreviewDuration": 1,
}


@dataclass(slots=True)
class MediaPaths:
    root: Path
    files: Path
    temp: Path


@dataclass(slots=True)
class PreviewLimits:
    ffmpeg_binary: str
    max_workers: int
    transcode_timeout_seconds: float | None


@dataclass(slots=True)
class AppConfig:
    media_paths: MediaPaths
    preview_limits: PreviewLimits
    engine: Engine
    session_factory: sessionmaker[Session]


def _ensure_media_paths(paths: MediaPaths) -> None:
    paths.root.mkdir(parents=True, exist_ok=True)
    paths.files.mkdir(parents=True, exist_ok=True)
    paths.temp.mkdir(parents=True, exist_ok=True)


def _load_plugin_defaults(path: str | None) -> dict[str, Any]:
    """Read the initial plugin configuration from a JSON file if provided."""
    if not path:
        return dict(DEFAULT_PLUGIN_CONFIGURATION)
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(
            "config.plugin_defaults.load_failed",
            extra={"path": path, "error": str(exc)},
        )
        return dict(DEFAULT_PLUGIN_CONFIGURATION)
    merged = dict(DEFAULT_PLUGIN_CONFIGURATION)
    if isinstance(payload, dict):
        merged.update(payload)
    return merged


def build_engine(database_url: str) -> Engine:
    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        # preview jobs touch the database from worker threads
        connect_args["check_same_thread"] = False
    return create_engine(database_url, future=True, connect_args=connect_args)


def load_config() -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    root = Path(os.getenv("MEDIA_ROOT", "media"))
    media_paths = MediaPaths(
        root=root,
        files=root / "files",
        temp=Path(os.getenv("PREVIEW_TEMP_DIR", str(root / "temp"))),
    )
    _ensure_media_paths(media_paths)

    timeout = float(os.getenv("TRANSCODE_TIMEOUT_SECONDS", 120))
    preview_limits = PreviewLimits(
        ffmpeg_binary=os.getenv("FFMPEG_BINARY", "ffmpeg"),
        max_workers=max(1, int(os.getenv("PREVIEW_MAX_WORKERS", 4))),
        transcode_timeout_seconds=timeout if timeout > 0 else None,
    )

    database_url = os.getenv("DATABASE_URL", "sqlite:///video_preview.db")
    engine = build_engine(database_url)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    plugin_defaults = _load_plugin_defaults(os.getenv("VIDEO_PLUGIN_CONFIG"))
    init_db(engine, session_factory, plugin_defaults=plugin_defaults)

    return AppConfig(
        media_paths=media_paths,
        preview_limits=preview_limits,
        engine=engine,
        session_factory=session_factory,
    )
