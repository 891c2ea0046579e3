from pathlib import Path

import pytest

from src.video_preview.exceptions import StorageError
from src.video_preview.storage.file_repository import FileInfoRepository
from src.video_preview.storage.file_store import FileStore
from tests.helpers.video_preview import build_app_config


def build_store(tmp_path: Path) -> FileStore:
    config = build_app_config(tmp_path)
    return FileStore(config.media_paths, FileInfoRepository(config.session_factory))


def test_put_and_get_round_trip_metadata(tmp_path: Path) -> None:
    store = build_store(tmp_path)

    info = store.put_bytes(b"movie", "Trip.MP4", "../../Trip.MP4")

    assert info.name == "Trip.MP4"
    assert info.size == 5
    assert info.extension == "mp4"
    assert info.mime_type == "video/mp4"
    assert store.get_metadata(info.id) == info
    assert store.get_bytes(info.id) == b"movie"
    assert (store.file_dir(info.id) / "Trip.MP4").is_file()


def test_explicit_mime_type_wins(tmp_path: Path) -> None:
    store = build_store(tmp_path)

    info = store.put_bytes(b"x", "preview_clip.mp4.jpg", "preview_1.jpg", mime_type="image/jpeg")

    assert info.mime_type == "image/jpeg"
    assert info.extension == "jpg"


def test_unknown_id_raises_key_error(tmp_path: Path) -> None:
    store = build_store(tmp_path)

    with pytest.raises(KeyError):
        store.get_metadata("missing")
    with pytest.raises(KeyError):
        store.get_bytes("missing")


def test_missing_bytes_raise_storage_error(tmp_path: Path) -> None:
    store = build_store(tmp_path)
    info = store.put_bytes(b"movie", "clip.mp4", "clip.mp4")
    (store.file_dir(info.id) / "clip.mp4").unlink()

    with pytest.raises(StorageError):
        store.get_bytes(info.id)
