"""
Mock Uploader Implementation

Simulated uploader for testing without the storage service.
Similar to MockTokenStore in the auth module.
"""

import logging
import time
from pathlib import Path
from typing import Optional
from uuid import uuid4

from upload.interfaces.uploader_interface import (
    CallMetadata,
    FileEntry,
    UploaderError,
    UploaderInterface,
    UploadIoError,
    UploadNetworkError,
)
from upload.utils.upload_utils import infer_file_type

# Step names accepted by fail_step
STEP_CREATE_FILE = "create_file"
STEP_UPLOAD = "upload"
STEP_METADATA = "metadata"


class MockUploader(UploaderInterface):
    """
    Mock storage uploader for testing.

    This simulates the three upload steps without network access.
    Useful for:
    - Unit tests
    - Development without storage credentials
    - CI/CD pipelines
    """

    def __init__(
        self,
        simulate_timing: bool = False,
        fail_step: Optional[str] = None,
        error: Optional[UploaderError] = None,
    ):
        """
        Initialize mock uploader.

        Args:
            simulate_timing: If True, sleep briefly in each step
            fail_step: Step that raises ("create_file", "upload", "metadata")
            error: Exception raised by the failing step (default: network)

        Example:
            # Fast mock for unit tests
            uploader = MockUploader()

            # Test error handling at the binary transfer
            uploader = MockUploader(fail_step="upload")
        """
        self.logger = logging.getLogger(__name__)
        self.simulate_timing = simulate_timing
        self.fail_step = fail_step
        self.error = error

        # Track calls for testing: (step, details) tuples in call order
        self.upload_history: list[tuple] = []

        self.logger.info(
            f"Mock Uploader initialized "
            f"(timing: {simulate_timing}, fail_step: {fail_step})",
        )

    def create_file_entry(self, access_token: str, file_name: str) -> FileEntry:
        self._simulate(STEP_CREATE_FILE)
        self.upload_history.append(
            (STEP_CREATE_FILE, {"token": access_token, "name": file_name,
                                "file_type": infer_file_type(file_name)}),
        )
        self._maybe_fail(STEP_CREATE_FILE)

        file_id = f"mock_{uuid4().hex[:11]}"
        self.logger.info(f"[MOCK] File entry created: {file_id}")
        return FileEntry(file_id=file_id, upload_url=f"mock://upload/{file_id}")

    def upload_binary(self, upload_url: str, file_path: Path) -> None:
        self._simulate(STEP_UPLOAD)
        self.upload_history.append((STEP_UPLOAD, {"url": upload_url, "path": file_path}))
        self._maybe_fail(STEP_UPLOAD)

        # Real file read, like the storage uploader
        try:
            size = len(Path(file_path).read_bytes())
        except OSError as e:
            raise UploadIoError(str(e)) from e

        self.logger.info(f"[MOCK] ✅ Uploaded {size} bytes")

    def create_metadata(
        self,
        access_token: str,
        file_id: str,
        metadata: CallMetadata,
    ) -> None:
        self._simulate(STEP_METADATA)
        self.upload_history.append(
            (STEP_METADATA, {"token": access_token, "file_id": file_id,
                             "metadata": metadata.to_dict()}),
        )
        self._maybe_fail(STEP_METADATA)
        self.logger.info(f"[MOCK] Metadata created for {file_id}")

    def _simulate(self, step: str) -> None:
        if self.simulate_timing:
            self.logger.debug(f"[MOCK] Simulating {step}")
            time.sleep(0.5)

    def _maybe_fail(self, step: str) -> None:
        if self.fail_step == step:
            self.logger.error(f"[MOCK] Simulated failure at {step}")
            raise self.error or UploadNetworkError(f"Simulated {step} failure")

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def get_steps(self) -> list[str]:
        """
        Get the step names called so far, in order.

        Returns:
            List like ["create_file", "upload", "metadata"]
        """
        return [step for step, _ in self.upload_history]

    def get_last_call(self, step: str) -> Optional[dict]:
        """
        Get details of the most recent call to a step.

        Returns:
            Call details, or None
        """
        for name, details in reversed(self.upload_history):
            if name == step:
                return details
        return None
