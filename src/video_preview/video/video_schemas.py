"""Response schemas for the video metadata routes."""

from __future__ import annotations

from pydantic import BaseModel


class VideoInfoResponse(BaseModel):
    id: str
    name: str
    mime_type: str
    size: int
    extension: str


class PreviewStatusResponse(BaseModel):
    file_id: str
    status: str
    preview_file_id: str | None = None
    failure_reason: str | None = None
    message: str
