"""Message post data structures."""

from dataclasses import dataclass, field
from typing import Any

HAS_VIDEO_PROP = "has_video"


@dataclass(slots=True)
class MessagePost:
    id: str
    channel_id: str = ""
    user_id: str = ""
    message: str = ""
    file_ids: list[str] = field(default_factory=list)
    props: dict[str, Any] | None = None
