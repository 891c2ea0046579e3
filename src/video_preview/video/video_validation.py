"""Format and size checks for video attachments."""

from __future__ import annotations

import mimetypes

from ..settings.settings_models import PluginConfiguration
from ..storage.storage_models import file_extension


def supported_formats(config: PluginConfiguration) -> set[str]:
    """Return the configured extensions, lowercased and trimmed."""
    return {
        item.strip()
        for item in config.supported_formats.lower().split(",")
        if item.strip()
    }


def is_supported_video(filename: str, config: PluginConfiguration) -> bool:
    extension = file_extension(filename)
    if not extension:
        return False
    return extension in supported_formats(config)


def exceeds_size_limit(size_bytes: int, config: PluginConfiguration) -> bool:
    """Strictly-greater-than check; an unset limit never rejects."""
    if config.max_file_size_mb <= 0:
        return False
    return size_bytes > config.max_file_size_bytes


def video_mime_type(filename: str) -> str:
    guessed, _ = mimetypes.guess_type(filename, strict=False)
    if guessed:
        return guessed
    return f"video/{file_extension(filename)}"
