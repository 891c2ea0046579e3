"""Plugin configuration snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PluginConfiguration(BaseModel):
    """Immutable snapshot of the host-supplied plugin configuration.

    Field aliases follow the host JSON schema (``EnableVideoPreview`` etc.).
    Every field defaults to its zero value so a missing configuration disables
    previews and matches no formats.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    enable_video_preview: bool = Field(default=False, alias="EnableVideoPreview")
    supported_formats: str = Field(default="", alias="SupportedFormats")
    max_file_size_mb: int = Field(default=0, ge=0, alias="MaxFileSize")
    preview_duration: int = Field(default=0, ge=0, alias="PreviewDuration")

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def to_host_json(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)
