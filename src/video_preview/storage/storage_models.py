"""Storage data models."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


def file_extension(name: str) -> str:
    """Return the lowercased text after the last dot of the basename.

    A dotfile such as ``.mp4`` counts as having the extension ``mp4``.
    """
    base = Path(name).name
    dot = base.rfind(".")
    if dot < 0:
        return ""
    return base[dot + 1 :].lower()


@dataclass(slots=True)
class FileInfo:
    id: str
    name: str
    size: int
    mime_type: str = ""
    extension: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)
