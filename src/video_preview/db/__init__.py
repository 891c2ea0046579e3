"""Database helpers for the video preview service."""

from .db_init import init_db
from .db_models import Base, FileInfoModel, SettingModel, VideoPreviewModel

__all__ = ["Base", "FileInfoModel", "SettingModel", "VideoPreviewModel", "init_db"]
