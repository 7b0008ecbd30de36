"""
Implementations Package

Concrete uploader implementations.
"""

from upload.implementations.mock_uploader import MockUploader
from upload.implementations.storage_uploader import StorageUploader

__all__ = [
    "MockUploader",
    "StorageUploader",
]
