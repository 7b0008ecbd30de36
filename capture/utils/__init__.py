"""
Capture Utilities Package

Exposes shared utility functions for capture operations.
"""

from capture.utils.capture_utils import (
    delete_recording,
    format_picked_source,
    generate_filename,
)

# Public API
__all__ = [
    "delete_recording",
    "format_picked_source",
    "generate_filename",
]
