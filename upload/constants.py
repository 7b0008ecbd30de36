"""
Upload Constants

Centralized configuration for the storage upload module.
Following the same pattern as auth/constants.py for consistency.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.settings import STORAGE_BASE_URL

# =============================================================================
# STORAGE API CONFIGURATION
# =============================================================================

# Step 1: multipart POST creating the file entry
FILES_URL = f"{STORAGE_BASE_URL}/files/v2"

# =============================================================================
# FILE TYPE INFERENCE
# =============================================================================

FILE_TYPE_AUDIO = "mp3"
FILE_TYPE_VIDEO = "mp4"

AUDIO_EXTENSIONS = [".mp3", ".flac", ".wav", ".m4a", ".aac"]
VIDEO_EXTENSIONS = [".mp4", ".mov", ".m4v", ".webm", ".avi"]

# Unknown extensions are uploaded as video
DEFAULT_FILE_TYPE = FILE_TYPE_VIDEO

BINARY_CONTENT_TYPE = "application/octet-stream"

# =============================================================================
# UPLOAD STATUS
# =============================================================================


class UploadStatus(Enum):
    """Upload pipeline stages"""

    IDLE = "idle"
    CREATING_FILE = "creating_file"
    UPLOADING_FILE = "uploading_file"
    CREATING_METADATA = "creating_metadata"
    COMPLETE = "complete"
    FAILED = "failed"


class UploadErrorKind(Enum):
    """Upload failure categories"""

    NETWORK = "network"
    IO = "io"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class UploadState:
    """
    Immutable snapshot of an upload job's progress.

    Only the field matching the status is meaningful: percent while
    uploading, file_id when complete, reason when failed.
    """

    status: UploadStatus
    percent: int = 0
    file_id: str = ""
    reason: str = ""

    @classmethod
    def idle(cls) -> "UploadState":
        return cls(UploadStatus.IDLE)

    @classmethod
    def creating_file(cls) -> "UploadState":
        return cls(UploadStatus.CREATING_FILE)

    @classmethod
    def uploading(cls, percent: int) -> "UploadState":
        return cls(UploadStatus.UPLOADING_FILE, percent=max(0, min(100, percent)))

    @classmethod
    def creating_metadata(cls) -> "UploadState":
        return cls(UploadStatus.CREATING_METADATA)

    @classmethod
    def complete(cls, file_id: str) -> "UploadState":
        return cls(UploadStatus.COMPLETE, file_id=file_id)

    @classmethod
    def failed(cls, reason: str) -> "UploadState":
        return cls(UploadStatus.FAILED, reason=reason)

    @property
    def is_terminal(self) -> bool:
        """Complete and Failed are held until the next user action."""
        return self.status in (UploadStatus.COMPLETE, UploadStatus.FAILED)

    @property
    def completed_file_id(self) -> Optional[str]:
        return self.file_id if self.status == UploadStatus.COMPLETE else None

    def display_text(self) -> str:
        """Human-readable status line for the UI."""
        if self.status == UploadStatus.IDLE:
            return "Ready"
        if self.status == UploadStatus.CREATING_FILE:
            return "Creating file entry..."
        if self.status == UploadStatus.UPLOADING_FILE:
            return f"Uploading... {self.percent}%"
        if self.status == UploadStatus.CREATING_METADATA:
            return "Creating metadata..."
        if self.status == UploadStatus.COMPLETE:
            return "Upload complete!"
        return f"Upload failed: {self.reason}"
