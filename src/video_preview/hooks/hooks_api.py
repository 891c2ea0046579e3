"""Upload and post routes running the plugin hooks before accepting data."""

from __future__ import annotations

import logging
import tempfile
import uuid

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from ..exceptions import StorageError
from ..plugin import VideoPreviewPlugin
from ..posts.post_models import MessagePost
from ..storage.file_store import FileStore
from ..storage.storage_models import FileInfo, file_extension
from .hooks_schemas import FileInfoResponse, PostCreateRequest, PostResponse

router = APIRouter(prefix="/api", tags=["hooks"])
logger = logging.getLogger(__name__)

SPOOL_MAX_MEMORY_BYTES = 8 * 1024 * 1024


def get_plugin(request: Request) -> VideoPreviewPlugin:
    try:
        return request.app.state.plugin  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("VideoPreviewPlugin is not configured") from exc


def get_file_store(request: Request) -> FileStore:
    try:
        return request.app.state.file_store  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("FileStore is not configured") from exc


def _upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    stream = upload.file
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)
    return size


@router.post("/files", status_code=status.HTTP_201_CREATED, response_model=FileInfoResponse)
def upload_file(
    file: UploadFile = File(...),
    plugin: VideoPreviewPlugin = Depends(get_plugin),
    store: FileStore = Depends(get_file_store),
) -> FileInfoResponse:
    name = file.filename or "upload.bin"
    info = FileInfo(
        id="",
        name=name,
        size=_upload_size(file),
        mime_type=file.content_type or "",
        extension=file_extension(name),
    )

    with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_MEMORY_BYTES) as sink:
        outcome = plugin.file_will_be_uploaded(info, file.file, sink)
        if outcome.rejected:
            logger.warning(
                "hooks.upload.rejected",
                extra={"file_name": name, "reason": outcome.rejection_reason},
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=outcome.rejection_reason,
            )
        if outcome.relayed:
            sink.seek(0)
            data = sink.read()
        else:
            file.file.seek(0)
            data = file.file.read()

    try:
        stored = store.put_bytes(
            data,
            outcome.info.name,
            outcome.info.name,
            mime_type=outcome.info.mime_type or None,
        )
    except StorageError as exc:
        logger.error("hooks.upload.store_failed", extra={"file_name": name, "error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store file",
        ) from exc

    return FileInfoResponse(
        id=stored.id,
        name=stored.name,
        size=stored.size,
        mime_type=stored.mime_type,
        extension=stored.extension,
        created_at=stored.created_at,
    )


@router.post("/posts", status_code=status.HTTP_201_CREATED, response_model=PostResponse)
def create_post(
    payload: PostCreateRequest,
    plugin: VideoPreviewPlugin = Depends(get_plugin),
) -> PostResponse:
    post = MessagePost(
        id=uuid.uuid4().hex,
        channel_id=payload.channel_id,
        user_id=payload.user_id,
        message=payload.message,
        file_ids=list(payload.file_ids),
        props=dict(payload.props) if payload.props is not None else None,
    )
    post = plugin.message_will_be_posted(post)
    return PostResponse(
        id=post.id,
        channel_id=post.channel_id,
        user_id=post.user_id,
        message=post.message,
        file_ids=post.file_ids,
        props=post.props,
    )
