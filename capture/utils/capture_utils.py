"""
Capture Utilities

Shared helper functions for capture and recording operations.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from capture.constants import SourceKind
from capture.interfaces.capture_engine_interface import PickedSource
from config.settings import RECORDING_FILE_EXTENSION, RECORDING_FILENAME_FORMAT


def generate_filename(
    base_path: Path,
    format_string: str = RECORDING_FILENAME_FORMAT,
    extension: str = RECORDING_FILE_EXTENSION,
    now: Optional[datetime] = None,
) -> Path:
    """
    Generate timestamped filename for recording.

    The timestamp resolves to the second, so a numeric suffix is added
    when a file with that name already exists.

    Args:
        base_path: Directory where file will be saved
        format_string: strftime format for filename
        extension: File extension (default: "mp4")
        now: Timestamp to use (default: current local time)

    Returns:
        Complete file path that does not exist yet

    Example:
        path = generate_filename(Path("/recordings"))
        # Returns: /recordings/recording_2025-01-15_143022.mp4
        # or /recordings/recording_2025-01-15_143022_1.mp4 if taken
    """
    timestamp = (now or datetime.now()).strftime(format_string)
    path = base_path / f"{timestamp}.{extension}"

    suffix = 1
    while path.exists():
        path = base_path / f"{timestamp}_{suffix}.{extension}"
        suffix += 1
    return path


def format_picked_source(source: PickedSource) -> str:
    """
    Display name for a picked source.

    Example:
        format_picked_source(PickedSource(SourceKind.WINDOW, "Notes", "TextEdit"))
        # "Window: Notes (TextEdit)"
    """
    if source.kind == SourceKind.DISPLAY:
        return f"Display: {source.name}"
    if source.kind == SourceKind.APPLICATION:
        return f"App: {source.name}"
    if source.app_name:
        return f"Window: {source.name} ({source.app_name})"
    return f"Window: {source.name}"


def delete_recording(path: Path) -> bool:
    """
    Delete a recording file.

    Returns:
        True if deleted, False if it could not be (logged)
    """
    try:
        path.unlink()
        return True
    except OSError as e:
        logging.getLogger(__name__).warning(f"⚠️ Failed to delete recording file: {e}")
        return False
