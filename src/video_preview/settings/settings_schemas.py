"""Pydantic schemas for the plugin settings API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class VideoSettingsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    EnableVideoPreview: bool
    SupportedFormats: str
    MaxFileSize: int
    PreviewDuration: int


class VideoSettingsUpdateRequest(BaseModel):
    EnableVideoPreview: bool | None = None
    SupportedFormats: str | None = Field(default=None, max_length=512)
    MaxFileSize: int | None = Field(default=None, ge=0)
    PreviewDuration: int | None = Field(default=None, ge=0)
