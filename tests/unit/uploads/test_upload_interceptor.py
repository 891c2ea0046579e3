from io import BytesIO

from src.video_preview.settings.settings_models import PluginConfiguration
from src.video_preview.storage.storage_models import FileInfo
from src.video_preview.uploads.upload_interceptor import (
    COPY_FAILED_REASON,
    SIZE_LIMIT_REASON,
    UploadInterceptor,
)
from tests.helpers.video_preview import StubConfigProvider

MB = 1024 * 1024


class BrokenStream(BytesIO):
    def read(self, *args, **kwargs):  # noqa: D401 - stream stub
        raise OSError("connection reset")


def build_interceptor(**overrides) -> tuple[UploadInterceptor, StubConfigProvider]:
    values = {
        "EnableVideoPreview": True,
        "SupportedFormats": "mp4,mov",
        "MaxFileSize": 1,
        "PreviewDuration": 1,
    }
    values.update(overrides)
    provider = StubConfigProvider(PluginConfiguration.model_validate(values))
    return UploadInterceptor(provider), provider  # type: ignore[arg-type]


def test_non_video_passes_through_untouched() -> None:
    interceptor, _ = build_interceptor()
    info = FileInfo(id="", name="report.pdf", size=50 * MB, mime_type="application/pdf")
    source = BytesIO(b"%PDF-1.7")
    sink = BytesIO()

    outcome = interceptor.file_will_be_uploaded(info, source, sink)

    assert outcome.info is info
    assert outcome.rejection_reason == ""
    assert outcome.relayed is False
    assert sink.getvalue() == b""
    assert source.tell() == 0


def test_oversized_video_is_rejected_without_copy() -> None:
    interceptor, _ = build_interceptor()
    info = FileInfo(id="", name="clip.mp4", size=MB + 1)
    sink = BytesIO()

    outcome = interceptor.file_will_be_uploaded(info, BytesIO(b"data"), sink)

    assert outcome.rejected
    assert outcome.rejection_reason == SIZE_LIMIT_REASON
    assert outcome.info is info
    assert sink.getvalue() == b""


def test_video_at_limit_is_copied_and_typed() -> None:
    interceptor, _ = build_interceptor()
    payload = b"\x00\x00\x00\x18ftypmp42" * 10
    info = FileInfo(id="", name="Clip.MP4", size=MB)
    sink = BytesIO()

    outcome = interceptor.file_will_be_uploaded(info, BytesIO(payload), sink)

    assert not outcome.rejected
    assert outcome.relayed is True
    assert sink.getvalue() == payload
    assert outcome.info.mime_type == "video/mp4"
    assert outcome.info.name == "Clip.MP4"
    assert info.mime_type == ""


def test_copy_failure_is_reported_as_rejection() -> None:
    interceptor, _ = build_interceptor()
    info = FileInfo(id="", name="clip.mov", size=10)

    outcome = interceptor.file_will_be_uploaded(info, BrokenStream(), BytesIO())

    assert outcome.rejected
    assert outcome.rejection_reason.startswith(COPY_FAILED_REASON)
    assert "connection reset" in outcome.rejection_reason


def test_explicit_snapshot_skips_provider() -> None:
    interceptor, provider = build_interceptor()
    snapshot = PluginConfiguration(supported_formats="avi", max_file_size_mb=0)
    info = FileInfo(id="", name="clip.avi", size=10 * MB)
    sink = BytesIO()

    outcome = interceptor.file_will_be_uploaded(info, BytesIO(b"avi"), sink, config=snapshot)

    assert provider.loads == 0
    assert outcome.relayed is True
    assert sink.getvalue() == b"avi"
