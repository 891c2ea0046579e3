from src.video_preview.exceptions import SchedulerClosedError, StorageError
from src.video_preview.posts.post_interceptor import PostInterceptor
from src.video_preview.posts.post_models import HAS_VIDEO_PROP, MessagePost
from src.video_preview.settings.settings_models import PluginConfiguration
from src.video_preview.storage.storage_models import FileInfo
from tests.helpers.video_preview import StubConfigProvider


class DictStorage:
    def __init__(self, *infos: FileInfo, broken: set[str] | None = None) -> None:
        self._infos = {info.id: info for info in infos}
        self._broken = broken or set()

    def get_metadata(self, file_id: str) -> FileInfo:
        if file_id in self._broken:
            raise StorageError("database unavailable")
        return self._infos[file_id]


class RecordingScheduler:
    def __init__(self, *, closed: bool = False) -> None:
        self.closed = closed
        self.submitted: list[tuple[FileInfo, PluginConfiguration]] = []

    def submit(self, source: FileInfo, config: PluginConfiguration) -> None:
        if self.closed:
            raise SchedulerClosedError("closed")
        self.submitted.append((source, config))


VIDEO = FileInfo(id="vid1", name="holiday.mp4", size=2048, mime_type="video/mp4", extension="mp4")
IMAGE = FileInfo(id="img1", name="photo.png", size=512, mime_type="image/png", extension="png")


def build(
    *,
    enabled: bool = True,
    storage: DictStorage | None = None,
    scheduler: RecordingScheduler | None = None,
) -> tuple[PostInterceptor, StubConfigProvider, RecordingScheduler]:
    provider = StubConfigProvider(
        PluginConfiguration(
            enable_video_preview=enabled,
            supported_formats="mp4,mov",
            max_file_size_mb=100,
            preview_duration=2,
        )
    )
    scheduler = scheduler or RecordingScheduler()
    interceptor = PostInterceptor(
        storage=storage or DictStorage(VIDEO, IMAGE),
        config_provider=provider,  # type: ignore[arg-type]
        scheduler=scheduler,
    )
    return interceptor, provider, scheduler


def test_post_without_attachments_is_returned_unchanged() -> None:
    interceptor, provider, scheduler = build()
    post = MessagePost(id="p1", message="hello")

    result = interceptor.message_will_be_posted(post)

    assert result is post
    assert result.props is None
    assert provider.loads == 0
    assert scheduler.submitted == []


def test_video_attachment_schedules_one_job_and_marks_post() -> None:
    interceptor, provider, scheduler = build()
    post = MessagePost(id="p1", file_ids=["vid1"])

    result = interceptor.message_will_be_posted(post)

    assert result.props == {HAS_VIDEO_PROP: True}
    assert [source.id for source, _ in scheduler.submitted] == ["vid1"]
    assert scheduler.submitted[0][1] is provider.config


def test_disabled_preview_schedules_nothing() -> None:
    interceptor, _, scheduler = build(enabled=False)
    post = MessagePost(id="p1", file_ids=["vid1"])

    result = interceptor.message_will_be_posted(post)

    assert scheduler.submitted == []
    assert result.props is None


def test_non_video_attachments_are_ignored() -> None:
    interceptor, _, scheduler = build()
    post = MessagePost(id="p1", file_ids=["img1"])

    result = interceptor.message_will_be_posted(post)

    assert scheduler.submitted == []
    assert result.props is None


def test_lookup_failures_are_skipped() -> None:
    storage = DictStorage(VIDEO, broken={"broken"})
    interceptor, _, scheduler = build(storage=storage)
    post = MessagePost(id="p1", file_ids=["missing", "broken", "vid1"])

    result = interceptor.message_will_be_posted(post)

    assert [source.id for source, _ in scheduler.submitted] == ["vid1"]
    assert result.props == {HAS_VIDEO_PROP: True}


def test_each_video_gets_its_own_job() -> None:
    second = FileInfo(id="vid2", name="clip.MOV", size=10)
    interceptor, _, scheduler = build(storage=DictStorage(VIDEO, second, IMAGE))
    post = MessagePost(id="p1", file_ids=["vid1", "img1", "vid2"])

    interceptor.message_will_be_posted(post)

    assert [source.id for source, _ in scheduler.submitted] == ["vid1", "vid2"]


def test_existing_props_are_preserved() -> None:
    interceptor, _, _ = build()
    post = MessagePost(id="p1", file_ids=["vid1"], props={"from_bot": "true"})

    result = interceptor.message_will_be_posted(post)

    assert result.props == {"from_bot": "true", HAS_VIDEO_PROP: True}


def test_closed_scheduler_does_not_reject_post() -> None:
    interceptor, _, _ = build(scheduler=RecordingScheduler(closed=True))
    post = MessagePost(id="p1", file_ids=["vid1"])

    result = interceptor.message_will_be_posted(post)

    assert result.props == {HAS_VIDEO_PROP: True}
