"""
Upload Pipeline

Runs the three storage steps for one recording and reports progress as a
sequence of UploadState values.

Status Flow:
    IDLE -> CREATING_FILE -> UPLOADING_FILE(0) -> UPLOADING_FILE(100)
         -> CREATING_METADATA -> COMPLETE(file_id)

    Any step failing -> FAILED(reason); later steps are not attempted.

Status is published synchronously to an Observable; observers either read
it or subscribe() to receive every transition on a queue. There are no
callbacks into the presentation layer.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from config.settings import UPLOAD_IS_PRIVATE, UPLOAD_PROVIDER_TAG
from core.observable import Observable
from upload.constants import UploadState
from upload.interfaces.uploader_interface import (
    CallMetadata,
    UploaderError,
    UploaderInterface,
    UploadIoError,
)
from upload.utils.upload_utils import format_upload_title, utc_timestamp


@dataclass
class UploadJob:
    """
    One upload attempt for one recording.

    Attributes:
        source_path: Recording being uploaded
        title: Title attached in the metadata step
        file_id: Storage id once step 1 succeeded
        state: Latest UploadState
        history: Every state the job went through, starting with IDLE
        error: Failure that ended the job, if any
    """

    source_path: Path
    title: str
    file_id: Optional[str] = None
    state: UploadState = field(default_factory=UploadState.idle)
    history: List[UploadState] = field(default_factory=list)
    error: Optional[UploaderError] = None

    def __post_init__(self):
        self.history.append(self.state)

    @property
    def succeeded(self) -> bool:
        return self.state.completed_file_id is not None


class UploadPipeline:
    """
    Sequential three-step uploader.

    Usage:
        status = Observable(UploadState.idle())
        pipeline = UploadPipeline(StorageUploader(), status)

        job = pipeline.run(credential.access_token, Path("rec.mp4"))
        if job.succeeded:
            print(f"Uploaded: {job.file_id}")
    """

    def __init__(
        self,
        uploader: UploaderInterface,
        status: Optional[Observable] = None,
    ):
        """
        Initialize upload pipeline.

        Args:
            uploader: UploaderInterface implementation
            status: Observable receiving each UploadState (optional)
        """
        self.logger = logging.getLogger(__name__)
        self.uploader = uploader
        self.status = status if status is not None else Observable(
            UploadState.idle(),
            name="upload_status",
        )

    def run(
        self,
        access_token: str,
        file_path: Path,
        title: Optional[str] = None,
    ) -> UploadJob:
        """
        Upload one recording end to end.

        Never raises for upload failures: the returned job ends in FAILED
        with the error attached. Steps are never retried.

        Args:
            access_token: Token valid for the whole job
            file_path: Recording to upload
            title: Metadata title (default: "<prefix> YYYY-MM-DD HH:MM:SS")

        Returns:
            The finished UploadJob
        """
        file_path = Path(file_path)
        job = UploadJob(source_path=file_path, title=title or format_upload_title())

        self.logger.info(f"📤 Starting upload: {file_path}")

        try:
            file_name = file_path.name
            if not file_name:
                raise UploadIoError("Invalid file name")

            self._advance(job, UploadState.creating_file())
            entry = self.uploader.create_file_entry(access_token, file_name)
            job.file_id = entry.file_id

            self._advance(job, UploadState.uploading(0))
            self.uploader.upload_binary(entry.upload_url, file_path)
            self._advance(job, UploadState.uploading(100))

            self._advance(job, UploadState.creating_metadata())
            metadata = CallMetadata(
                file_id=entry.file_id,
                title=job.title,
                recorded_datetime=utc_timestamp(),
                provider=UPLOAD_PROVIDER_TAG,
                is_private=UPLOAD_IS_PRIVATE,
            )
            self.uploader.create_metadata(access_token, entry.file_id, metadata)

        except UploaderError as e:
            job.error = e
            self.logger.error(f"❌ Upload failed: {e}")
            self._advance(job, UploadState.failed(str(e)))
            return job

        self._advance(job, UploadState.complete(entry.file_id))
        self.logger.info(f"✅ Upload complete: {entry.file_id}")
        return job

    def _advance(self, job: UploadJob, state: UploadState) -> None:
        job.state = state
        job.history.append(state)
        self.status.set(state)
        self.logger.debug(f"Upload status: {state.display_text()}")

