"""
Upload Test Configuration and Fixtures

Shared fixtures for upload tests.
"""

import pytest

from core.observable import Observable
from upload.constants import UploadState
from upload.implementations.mock_uploader import MockUploader
from upload.implementations.storage_uploader import StorageUploader

FILES_URL = "https://storage.test/files/v2"


@pytest.fixture
def recording_file(tmp_path):
    """
    Provide a small fake recording on disk.

    Usage:
        def test_upload(recording_file):
            pipeline.run("token", recording_file)
    """
    path = tmp_path / "recording_2025-10-12_183045.mp4"
    path.write_bytes(b"\x00\x00\x00\x20ftypmp42" + b"\x00" * 256)
    return path


@pytest.fixture
def status():
    """Provide a fresh upload status observable."""
    return Observable(UploadState.idle(), name="upload_status")


@pytest.fixture
def mock_uploader():
    """Provide a MockUploader that succeeds every step."""
    return MockUploader()


@pytest.fixture
def storage_uploader(fake_http):
    """Provide StorageUploader talking to the fake HTTP session."""
    return StorageUploader(files_url=FILES_URL, http=fake_http)


def drain(channel):
    """All values currently queued on a status channel."""
    values = []
    while not channel.empty():
        values.append(channel.get_nowait())
    return values


@pytest.fixture
def drain_channel():
    """
    Provide a helper that empties a status channel.

    Usage:
        channel = status.subscribe()
        ...
        assert drain_channel(channel) == [...]
    """
    return drain
