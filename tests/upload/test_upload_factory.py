"""
Upload Factory Tests

To run:
    pytest tests/upload/test_upload_factory.py -v
"""

import pytest

from core.observable import Observable
from upload import factory
from upload.constants import UploadState
from upload.factory import UploaderConfigError, create_upload_pipeline, create_uploader
from upload.implementations.mock_uploader import MockUploader
from upload.implementations.storage_uploader import StorageUploader


@pytest.mark.unit
def test_mock_only_when_requested():
    assert isinstance(create_uploader("mock"), MockUploader)


@pytest.mark.unit
def test_storage_uploader_from_base_url(monkeypatch):
    monkeypatch.setattr(factory, "STORAGE_BASE_URL", "https://storage.test/")

    uploader = create_uploader("storage")

    assert isinstance(uploader, StorageUploader)
    assert uploader.files_url == "https://storage.test/files/v2"


@pytest.mark.unit
def test_default_mode_comes_from_settings(monkeypatch):
    monkeypatch.setattr(factory, "UPLOADER_MODE", "mock")

    assert isinstance(create_uploader(), MockUploader)


@pytest.mark.unit
@pytest.mark.parametrize("base_url", ["", "   "])
def test_missing_storage_url_is_an_error_not_a_mock(monkeypatch, base_url):
    monkeypatch.setattr(factory, "STORAGE_BASE_URL", base_url)
    monkeypatch.setattr(factory, "UPLOADER_MODE", "storage")

    with pytest.raises(UploaderConfigError):
        create_uploader()


@pytest.mark.unit
def test_unknown_mode_raises():
    with pytest.raises(UploaderConfigError):
        create_uploader("youtube")


@pytest.mark.unit
def test_create_upload_pipeline_publishes_to_given_status(tmp_path):
    status = Observable(UploadState.idle())
    recording = tmp_path / "rec.mp4"
    recording.write_bytes(b"data")

    pipeline = create_upload_pipeline(MockUploader(), status)
    job = pipeline.run("token", recording)

    assert status.get() == UploadState.complete(job.file_id)
