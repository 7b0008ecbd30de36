"""
Capture Test Configuration and Fixtures

Shared fixtures for the capture orchestrator tests.

The orchestrator is driven synchronously with step(); only uploads run on
their own threads.
"""

import queue
import threading

import pytest

from auth.models import Credential
from capture.controllers.capture_orchestrator import CaptureOrchestrator
from capture.implementations.mock_capture import (
    MockCaptureEngine,
    MockRecordingEngine,
    MockSourcePicker,
)
from capture.interfaces.capture_engine_interface import RecordingConfig
from upload.implementations.mock_uploader import MockUploader

# =============================================================================
# COLLABORATORS
# =============================================================================


@pytest.fixture
def capture_engine():
    """Provide MockCaptureEngine."""
    return MockCaptureEngine()


@pytest.fixture
def recording_engine():
    """Provide MockRecordingEngine (writes tiny real files)."""
    return MockRecordingEngine(payload_size=128)


@pytest.fixture
def picker():
    """Provide MockSourcePicker that picks the built-in display at once."""
    return MockSourcePicker()


@pytest.fixture
def uploader():
    """Provide MockUploader that succeeds every step."""
    return MockUploader()


class GatedUploader(MockUploader):
    """MockUploader whose binary transfer waits until released."""

    def __init__(self):
        super().__init__()
        self.release = threading.Event()
        self.transferring: "queue.Queue" = queue.Queue()

    def upload_binary(self, upload_url, file_path):
        self.transferring.put(file_path)
        self.release.wait(timeout=5.0)
        super().upload_binary(upload_url, file_path)

    def file_id_for(self, file_path):
        for step, details in self.upload_history:
            if step == "upload" and details["path"] == file_path:
                return details["url"].rsplit("/", 1)[1]
        return None


@pytest.fixture
def valid_credential():
    """Credential good for an hour."""
    return Credential.issued("access-token", expires_in=3600, refresh_token="refresh")


@pytest.fixture
def logged_in_state(shared_state, valid_credential):
    """SharedState holding a valid credential."""
    shared_state.credential.set(valid_credential)
    return shared_state


# =============================================================================
# ORCHESTRATOR
# =============================================================================


@pytest.fixture
def orchestrator(
    capture_engine,
    recording_engine,
    picker,
    shared_state,
    uploader,
    tmp_path,
):
    """
    Provide CaptureOrchestrator with mock collaborators.

    Recordings go to tmp_path; the upload monitor polls quickly and the
    login notice clears after 50 ms.

    Usage:
        def test_x(orchestrator, drive):
            drive(orchestrator, CaptureCommand.SELECT_SOURCE)
    """
    orch = CaptureOrchestrator(
        command_queue=queue.Queue(),
        capture_engine=capture_engine,
        recording_engine=recording_engine,
        picker=picker,
        shared_state=shared_state,
        uploader=uploader,
        recording_config=RecordingConfig(output_dir=tmp_path),
        monitor_interval=0.01,
        login_notice_seconds=0.05,
    )
    yield orch
    orch.wait_for_upload(timeout=5.0)


def _drive(orchestrator, *commands):
    """Send commands one loop iteration each, then one idle iteration."""
    for command in commands:
        orchestrator.send(command)
        orchestrator.step(timeout=0.01)
    # Let a picker result deposited by the last command be taken
    orchestrator.step(timeout=0)


@pytest.fixture
def drive():
    """
    Provide a helper that runs commands through the loop synchronously.

    Usage:
        drive(orchestrator, CaptureCommand.SELECT_SOURCE,
              CaptureCommand.START_RECORDING)
    """
    return _drive


@pytest.fixture
def gated_orchestrator(
    capture_engine,
    recording_engine,
    picker,
    logged_in_state,
    tmp_path,
):
    """
    Provide (orchestrator, uploader) where uploads park mid-transfer.

    Each upload puts its file on uploader.transferring and waits for
    uploader.release, so several jobs can be in flight at once.
    """
    uploader = GatedUploader()
    orch = CaptureOrchestrator(
        command_queue=queue.Queue(),
        capture_engine=capture_engine,
        recording_engine=recording_engine,
        picker=picker,
        shared_state=logged_in_state,
        uploader=uploader,
        recording_config=RecordingConfig(output_dir=tmp_path),
        monitor_interval=0.01,
    )
    yield orch, uploader
    uploader.release.set()
    orch.wait_for_upload(timeout=5.0)
