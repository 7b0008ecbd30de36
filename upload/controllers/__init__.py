"""
Controllers Package

High-level upload coordinators.
"""

from upload.controllers.upload_pipeline import UploadJob, UploadPipeline

__all__ = [
    "UploadJob",
    "UploadPipeline",
]
