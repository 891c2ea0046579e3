import pytest

from src.video_preview.preview.preview_models import PreviewStatus
from src.video_preview.preview.preview_repository import PreviewLinkRepository
from tests.helpers.video_preview import build_app_config


@pytest.fixture
def links(tmp_path) -> PreviewLinkRepository:
    return PreviewLinkRepository(build_app_config(tmp_path).session_factory)


def test_get_unknown_video_raises_key_error(links) -> None:
    with pytest.raises(KeyError):
        links.get("missing")


def test_newer_submission_wins_over_stale_job(links) -> None:
    links.mark_pending("vid", "job-old")
    links.mark_pending("vid", "job-new")

    links.mark_done("vid", "job-old", "stale-preview")
    link = links.get("vid")
    assert link.job_id == "job-new"
    assert link.status is PreviewStatus.PENDING
    assert link.preview_file_id is None

    links.mark_done("vid", "job-new", "fresh-preview")
    link = links.get("vid")
    assert link.status is PreviewStatus.DONE
    assert link.preview_file_id == "fresh-preview"


def test_failure_clears_previous_preview(links) -> None:
    links.mark_done("vid", "job-1", "preview-1")
    links.mark_pending("vid", "job-2")
    links.mark_failed("vid", "job-2", "transcode_failed")

    link = links.get("vid")
    assert link.status is PreviewStatus.FAILED
    assert link.failure_reason == "transcode_failed"
    assert link.preview_file_id is None
