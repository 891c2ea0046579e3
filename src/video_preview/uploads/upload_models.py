"""Data structures for upload interception."""

from dataclasses import dataclass

from ..storage.storage_models import FileInfo


@dataclass(slots=True)
class UploadOutcome:
    """Result of intercepting one upload.

    ``relayed`` tells the caller whether the bytes were copied to the sink;
    when it is False the original stream must be stored as-is.
    """

    info: FileInfo
    rejection_reason: str = ""
    relayed: bool = False

    @property
    def rejected(self) -> bool:
        return bool(self.rejection_reason)
