"""
Upload Factory

Builds the uploader used for finished recordings.

Production always talks to the storage service. A missing STORAGE_BASE_URL
is a configuration error and fails startup; the mock uploader is only
returned when asked for by name (UPLOADER_MODE=mock, or mode="mock").
"""

import logging
from typing import Literal, Optional

from config.settings import STORAGE_BASE_URL, UPLOADER_MODE
from core.observable import Observable
from upload.controllers.upload_pipeline import UploadPipeline
from upload.implementations.mock_uploader import MockUploader
from upload.implementations.storage_uploader import StorageUploader
from upload.interfaces.uploader_interface import UploaderInterface

# Type alias
UploaderMode = Literal["storage", "mock"]

_logger = logging.getLogger(__name__)


class UploaderConfigError(ValueError):
    """Raised when no usable uploader can be built from configuration."""
    pass


def create_uploader(mode: Optional[str] = None) -> UploaderInterface:
    """
    Create the uploader for recordings.

    Args:
        mode: "storage" or "mock" (default: UPLOADER_MODE setting)

    Raises:
        UploaderConfigError: If the mode is unknown or storage is not configured
    """
    mode = (mode or UPLOADER_MODE).lower()

    if mode == "mock":
        _logger.warning("⚠️ Using Mock Uploader - recordings will NOT be uploaded")
        return MockUploader()

    if mode != "storage":
        raise UploaderConfigError(f"Unknown uploader mode: {mode!r}")

    base_url = STORAGE_BASE_URL.strip().rstrip("/")
    if not base_url:
        _logger.error("❌ STORAGE_BASE_URL is empty, cannot upload recordings")
        raise UploaderConfigError(
            "STORAGE_BASE_URL not set. "
            "Add to .env file: STORAGE_BASE_URL=https://storage.example.com"
        )

    _logger.info(f"Creating Storage Uploader ({base_url})")
    return StorageUploader(files_url=f"{base_url}/files/v2")


def create_upload_pipeline(
    uploader: UploaderInterface,
    status: Optional[Observable] = None,
) -> UploadPipeline:
    """
    One pipeline per upload job, publishing to its own status observable.

    Example:
        job_status = Observable(UploadState.idle())
        pipeline = create_upload_pipeline(uploader, job_status)
    """
    return UploadPipeline(uploader, status)
