"""
Storage Uploader Implementation

Concrete implementation of UploaderInterface for the storage HTTP API.

Protocol:
1. POST /files/v2 (multipart: name, file-type)   -> {file_id, upload_url}
2. PUT <upload_url> (whole file, octet-stream)
3. POST /files/v2/<file_id>/call (JSON metadata)

The access token is sent verbatim in the Authorization header, without a
"Bearer" prefix.
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from config.settings import HTTP_TIMEOUT, UPLOAD_TIMEOUT
from upload.constants import (
    BINARY_CONTENT_TYPE,
    FILES_URL,
)
from upload.interfaces.uploader_interface import (
    CallMetadata,
    FileEntry,
    UploaderInterface,
    UploadInvalidResponseError,
    UploadIoError,
    UploadNetworkError,
)
from upload.utils.upload_utils import infer_file_type


class StorageUploader(UploaderInterface):
    """
    Storage service uploader using requests.

    Features:
    - Single-request binary transfer (file read fully into memory)
    - No retries; each failure is reported to the caller once
    """

    def __init__(
        self,
        files_url: str = FILES_URL,
        http: Optional[requests.Session] = None,
    ):
        """
        Initialize storage uploader.

        Args:
            files_url: Base URL of the files endpoint
            http: requests.Session to use (tests pass a fake)
        """
        self.logger = logging.getLogger(__name__)
        self.files_url = files_url.rstrip("/")
        self.http = http or requests.Session()

    # =========================================================================
    # STEP 1: FILE ENTRY
    # =========================================================================

    def create_file_entry(self, access_token: str, file_name: str) -> FileEntry:
        file_type = infer_file_type(file_name)
        self.logger.info(f"Creating file entry: {file_name} (type: {file_type})")

        # (None, value) tuples make requests send plain multipart text fields
        fields = {
            "name": (None, file_name),
            "file-type": (None, file_type),
        }

        try:
            response = self.http.post(
                self.files_url,
                headers={"Authorization": access_token, "Accept": "application/json"},
                files=fields,
                timeout=HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            raise UploadNetworkError(str(e)) from e

        self._check_status(response)

        try:
            data = response.json()
        except ValueError as e:
            raise UploadInvalidResponseError(str(e)) from e

        entry = FileEntry.from_response(data)
        self.logger.info(f"File entry created: {entry.file_id}")
        return entry

    # =========================================================================
    # STEP 2: BINARY TRANSFER
    # =========================================================================

    def upload_binary(self, upload_url: str, file_path: Path) -> None:
        try:
            payload = Path(file_path).read_bytes()
        except OSError as e:
            raise UploadIoError(str(e)) from e

        size_mb = len(payload) / (1024 * 1024)
        self.logger.info(f"Uploading {file_path} ({size_mb:.1f} MB)")

        try:
            response = self.http.put(
                upload_url,
                data=payload,
                headers={
                    "Content-Type": BINARY_CONTENT_TYPE,
                    "Content-Length": str(len(payload)),
                },
                timeout=UPLOAD_TIMEOUT,
            )
        except requests.RequestException as e:
            raise UploadNetworkError(str(e)) from e

        self._check_status(response)
        self.logger.info("File uploaded successfully")

    # =========================================================================
    # STEP 3: CALL METADATA
    # =========================================================================

    def create_metadata(
        self,
        access_token: str,
        file_id: str,
        metadata: CallMetadata,
    ) -> None:
        url = f"{self.files_url}/{file_id}/call"

        self.logger.info(f"Creating call metadata for file: {file_id}")

        try:
            response = self.http.post(
                url,
                headers={"Authorization": access_token, "Accept": "application/json"},
                json=metadata.to_dict(),
                timeout=HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            raise UploadNetworkError(str(e)) from e

        self._check_status(response)
        self.logger.info("Call metadata created successfully")

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _check_status(self, response: requests.Response) -> None:
        if not response.ok:
            raise UploadNetworkError(f"HTTP {response.status_code}: {response.text}")
