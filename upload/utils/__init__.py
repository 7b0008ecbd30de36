"""
Upload Utilities Package

Exposes shared helpers for upload operations.
"""

from upload.utils.upload_utils import (
    format_upload_title,
    format_view_url,
    infer_file_type,
    utc_timestamp,
)

# Public API
__all__ = [
    "format_upload_title",
    "format_view_url",
    "infer_file_type",
    "utc_timestamp",
]
