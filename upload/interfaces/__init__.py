"""
Interfaces Package

Abstract interfaces for upload implementations.
"""

from upload.interfaces.uploader_interface import (
    CallMetadata,
    FileEntry,
    UploaderError,
    UploaderInterface,
    UploadInvalidResponseError,
    UploadIoError,
    UploadNetworkError,
)

__all__ = [
    "CallMetadata",
    "FileEntry",
    "UploaderError",
    "UploaderInterface",
    "UploadInvalidResponseError",
    "UploadIoError",
    "UploadNetworkError",
]
