"""ffmpeg wrapper extracting a single preview frame.

The command line is fixed::

    ffmpeg -i <input> -ss <offset> -vframes 1 -q:v 2 -y <output>

``-q:v 2`` is the high quality end of ffmpeg's JPEG scale (2-31, lower is
better). Standard error is captured and attached to :class:`TranscodeError`
so callers can log ffmpeg's diagnostics.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import TranscodeError

# JPEG quality setting for ffmpeg (2-31, lower = better quality)
PREVIEW_JPEG_QUALITY = 2


def _decode(stream: bytes | str | None) -> str:
    if not stream:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


@dataclass(slots=True)
class FfmpegTranscoder:
    """Run ffmpeg as a subprocess, one call per preview."""

    binary: str = "ffmpeg"
    timeout_seconds: float | None = None
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def build_command(self, input_path: Path, output_path: Path, offset_seconds: int) -> list[str]:
        return [
            self.binary,
            "-i",
            str(input_path),
            "-ss",
            str(int(offset_seconds)),
            "-vframes",
            "1",
            "-q:v",
            str(PREVIEW_JPEG_QUALITY),
            "-y",
            str(output_path),
        ]

    def extract_frame(self, input_path: Path, output_path: Path, offset_seconds: int) -> None:
        """Write one JPEG frame taken ``offset_seconds`` into the video.

        Raises:
            TranscodeError: ffmpeg is missing, exits non-zero, times out or
                leaves an empty output file.
        """
        cmd = self.build_command(input_path, output_path, offset_seconds)
        try:
            subprocess.run(
                cmd,
                capture_output=True,
                check=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.CalledProcessError as exc:
            raise TranscodeError(
                f"ffmpeg exited with status {exc.returncode}",
                stderr=_decode(exc.stderr),
                returncode=exc.returncode,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise TranscodeError(
                f"ffmpeg timed out after {self.timeout_seconds}s",
                stderr=_decode(exc.stderr),
            ) from exc
        except OSError as exc:
            # binary not found or not executable
            raise TranscodeError(f"Cannot start {self.binary}: {exc}") from exc

        if not output_path.is_file() or output_path.stat().st_size == 0:
            raise TranscodeError(f"ffmpeg produced no output at {output_path}")
        self.log.debug(
            "preview.transcode.done",
            extra={"input": str(input_path), "output": str(output_path), "offset_seconds": offset_seconds},
        )
