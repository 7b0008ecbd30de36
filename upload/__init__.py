"""
Upload Module

Three-step recording upload to the storage service.

Public API:
    - UploadPipeline: Runs create-file, upload and metadata steps
    - UploadJob: One upload attempt with its status history
    - UploadState / UploadStatus: Progress values
    - create_uploader / create_upload_pipeline: Factory functions

Usage:
    from upload import create_upload_pipeline, create_uploader

    pipeline = create_upload_pipeline(create_uploader(), job_status)
    job = pipeline.run(access_token, Path("/recordings/rec.mp4"))
"""

from upload.constants import UploadErrorKind, UploadState, UploadStatus
from upload.controllers.upload_pipeline import UploadJob, UploadPipeline
from upload.factory import (
    UploaderConfigError,
    create_upload_pipeline,
    create_uploader,
)
from upload.interfaces.uploader_interface import UploaderError, UploaderInterface

# Public API
__all__ = [
    "UploadErrorKind",
    "UploadJob",
    "UploadPipeline",
    "UploadState",
    "UploadStatus",
    "UploaderError",
    "UploaderConfigError",
    "UploaderInterface",
    "create_upload_pipeline",
    "create_uploader",
]
