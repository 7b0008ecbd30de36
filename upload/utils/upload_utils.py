"""
Upload Utilities

Shared helpers for building upload requests.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from config.settings import UPLOAD_TITLE_PREFIX, UPLOAD_VIEW_URL_TEMPLATE
from upload.constants import (
    AUDIO_EXTENSIONS,
    DEFAULT_FILE_TYPE,
    FILE_TYPE_AUDIO,
    FILE_TYPE_VIDEO,
    VIDEO_EXTENSIONS,
)


def infer_file_type(file_name: str) -> str:
    """
    Pick the storage file type from a file name's extension.

    Args:
        file_name: File name or path (case-insensitive)

    Returns:
        "mp3" for audio, "mp4" for video or anything unrecognized

    Example:
        infer_file_type("Call.WAV")  # "mp3"
        infer_file_type("notes.txt")  # "mp4"
    """
    suffix = Path(file_name).suffix.lower()
    if suffix in AUDIO_EXTENSIONS:
        return FILE_TYPE_AUDIO
    if suffix in VIDEO_EXTENSIONS:
        return FILE_TYPE_VIDEO
    return DEFAULT_FILE_TYPE


def format_upload_title(
    timestamp: Optional[datetime] = None,
    prefix: str = UPLOAD_TITLE_PREFIX,
) -> str:
    """
    Format the default recording title.

    Example:
        format_upload_title(datetime(2025, 10, 12, 18, 30, 45))
        # "Recording 2025-10-12 18:30:45"
    """
    timestamp = timestamp or datetime.now()
    return f"{prefix} {timestamp.strftime('%Y-%m-%d %H:%M:%S')}"


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """RFC 3339 / ISO-8601 UTC timestamp for recorded_datetime."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


def format_view_url(file_id: str) -> str:
    """Web page where an uploaded recording can be viewed."""
    return UPLOAD_VIEW_URL_TEMPLATE.format(file_id=file_id)
