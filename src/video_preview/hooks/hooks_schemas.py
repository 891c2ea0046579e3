"""Pydantic schemas for the host hook routes."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class FileInfoResponse(BaseModel):
    id: str
    name: str
    size: int
    mime_type: str
    extension: str
    created_at: datetime


class PostCreateRequest(BaseModel):
    channel_id: str = ""
    user_id: str = ""
    message: str = ""
    file_ids: list[str] = Field(default_factory=list)
    props: dict[str, Any] | None = None


class PostResponse(BaseModel):
    id: str
    channel_id: str
    user_id: str
    message: str
    file_ids: list[str]
    props: dict[str, Any] | None = None
