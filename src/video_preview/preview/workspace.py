"""Per-job transient directory for transcoder input and output."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PREVIEW_FILENAME = "preview.jpg"


@dataclass(slots=True)
class TranscodeWorkspace:
    directory: Path
    input_path: Path
    output_path: Path


def workspace_dir(root: Path, file_id: str, job_id: str) -> Path:
    return root / f"{file_id}-{job_id}"


def _input_filename(source_name: str) -> str:
    name = Path(source_name).name or "source.bin"
    return f"video_{name}"


@contextmanager
def transcode_workspace(
    root: Path, file_id: str, job_id: str, source_name: str
) -> Iterator[TranscodeWorkspace]:
    """Create the job directory and remove it with everything inside on exit.

    The directory name includes the job id, so two jobs for the same video
    never share files.
    """
    directory = workspace_dir(root, file_id, job_id)
    directory.mkdir(parents=True, exist_ok=False)
    try:
        yield TranscodeWorkspace(
            directory=directory,
            input_path=directory / _input_filename(source_name),
            output_path=directory / PREVIEW_FILENAME,
        )
    finally:
        shutil.rmtree(directory, ignore_errors=True)
        if directory.exists():
            logger.error(
                "preview.workspace.cleanup_failed",
                extra={"file_id": file_id, "job_id": job_id, "path": str(directory)},
            )
