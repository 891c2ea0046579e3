"""Read-only routes answering video metadata and preview status lookups."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, Response

from ..exceptions import StorageError
from ..preview.preview_models import PreviewStatus
from ..preview.preview_repository import PreviewLinkRepository
from ..settings.settings_api import get_configuration_provider
from ..settings.settings_service import ConfigurationProvider
from ..storage.file_store import FileStore
from .video_schemas import PreviewStatusResponse, VideoInfoResponse
from .video_validation import is_supported_video

router = APIRouter(prefix="/video", tags=["video"])
logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    PreviewStatus.PENDING: "Preview generation queued",
    PreviewStatus.PROCESSING: "Preview generation in progress",
    PreviewStatus.DONE: "Preview ready",
    PreviewStatus.FAILED: "Preview generation failed",
}


def get_file_store(request: Request) -> FileStore:
    try:
        return request.app.state.file_store  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("FileStore is not configured") from exc


def get_preview_links(request: Request) -> PreviewLinkRepository:
    try:
        return request.app.state.preview_links  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("PreviewLinkRepository is not configured") from exc


def _missing_file_id() -> PlainTextResponse:
    return PlainTextResponse(
        "file_id parameter is required", status_code=status.HTTP_400_BAD_REQUEST
    )


@router.get("/info", response_model=VideoInfoResponse)
def video_info(
    file_id: str | None = None,
    store: FileStore = Depends(get_file_store),
    config_provider: ConfigurationProvider = Depends(get_configuration_provider),
) -> Response | VideoInfoResponse:
    if not file_id:
        return _missing_file_id()

    try:
        info = store.get_metadata(file_id)
    except (KeyError, StorageError):
        return PlainTextResponse("File not found", status_code=status.HTTP_404_NOT_FOUND)

    if not is_supported_video(info.name, config_provider.load()):
        return PlainTextResponse(
            "Not a supported video format", status_code=status.HTTP_400_BAD_REQUEST
        )

    return VideoInfoResponse(
        id=info.id,
        name=info.name,
        mime_type=info.mime_type,
        size=info.size,
        extension=info.extension,
    )


@router.get("/preview", response_model=PreviewStatusResponse)
def video_preview_status(
    file_id: str | None = None,
    links: PreviewLinkRepository = Depends(get_preview_links),
) -> Response | PreviewStatusResponse:
    if not file_id:
        return _missing_file_id()

    try:
        link = links.get(file_id)
    except KeyError:
        return PlainTextResponse(
            "No preview requested for this file", status_code=status.HTTP_404_NOT_FOUND
        )

    return PreviewStatusResponse(
        file_id=link.file_id,
        status=link.status.value,
        preview_file_id=link.preview_file_id,
        failure_reason=link.failure_reason,
        message=STATUS_MESSAGES[link.status],
    )


@router.get("/preview/image")
def video_preview_image(
    file_id: str | None = None,
    links: PreviewLinkRepository = Depends(get_preview_links),
    store: FileStore = Depends(get_file_store),
) -> Response:
    if not file_id:
        return _missing_file_id()

    try:
        link = links.get(file_id)
    except KeyError:
        link = None
    if link is None or link.status != PreviewStatus.DONE or not link.preview_file_id:
        return PlainTextResponse("Preview not available", status_code=status.HTTP_404_NOT_FOUND)

    try:
        preview = store.get_metadata(link.preview_file_id)
        payload = store.get_bytes(link.preview_file_id)
    except (KeyError, StorageError) as exc:
        logger.warning(
            "video.preview.image_missing",
            extra={"file_id": file_id, "preview_file_id": link.preview_file_id, "error": str(exc)},
        )
        return PlainTextResponse("Preview not available", status_code=status.HTTP_404_NOT_FOUND)

    return Response(content=payload, media_type=preview.mime_type or "image/jpeg")
