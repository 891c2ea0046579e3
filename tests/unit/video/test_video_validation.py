import pytest

from src.video_preview.settings.settings_models import PluginConfiguration
from src.video_preview.video.video_validation import (
    exceeds_size_limit,
    is_supported_video,
    supported_formats,
    video_mime_type,
)


def make_config(**overrides) -> PluginConfiguration:
    values = {"SupportedFormats": "mp4,mov", "MaxFileSize": 10}
    values.update(overrides)
    return PluginConfiguration.model_validate(values)


@pytest.mark.parametrize("filename", ["clip.mp4", "clip.MP4", "CLIP.Mov", "dir/sub/clip.mov", ".mp4"])
def test_supported_video_is_case_insensitive(filename: str) -> None:
    assert is_supported_video(filename, make_config()) is True


def test_same_result_regardless_of_extension_case() -> None:
    config = make_config()

    assert is_supported_video("clip.MP4", config) == is_supported_video("clip.mp4", config)


def test_configured_formats_are_trimmed_and_lowercased() -> None:
    config = make_config(SupportedFormats=" MP4 , Mov ,,")

    assert supported_formats(config) == {"mp4", "mov"}
    assert is_supported_video("clip.mov", config) is True


@pytest.mark.parametrize("filename", ["clip.avi", "clip", "clip.mp4.txt", "mp4", ""])
def test_unsupported_or_missing_extension(filename: str) -> None:
    assert is_supported_video(filename, make_config()) is False


def test_empty_configuration_matches_nothing() -> None:
    config = PluginConfiguration()

    assert is_supported_video("clip.mp4", config) is False
    assert is_supported_video("clip", config) is False


def test_size_limit_boundary_is_strictly_greater_than() -> None:
    config = make_config(MaxFileSize=2)
    limit = 2 * 1024 * 1024

    assert exceeds_size_limit(limit, config) is False
    assert exceeds_size_limit(limit + 1, config) is True
    assert exceeds_size_limit(0, config) is False


def test_unset_size_limit_never_rejects() -> None:
    assert exceeds_size_limit(10**12, PluginConfiguration()) is False


def test_mime_type_uses_standard_lookup() -> None:
    assert video_mime_type("clip.mp4") == "video/mp4"
    assert video_mime_type("clip.MOV") == "video/quicktime"


def test_mime_type_falls_back_to_extension() -> None:
    assert video_mime_type("clip.QQV") == "video/qqv"
