"""
Upload Utilities Tests

Tests for upload helpers and UploadState display text.

To run:
    pytest tests/upload/test_upload_utils.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from upload.constants import UploadState, UploadStatus
from upload.utils.upload_utils import (
    format_upload_title,
    format_view_url,
    infer_file_type,
    utc_timestamp,
)

# =============================================================================
# FILE TYPE INFERENCE TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, expected",
    [
        ("call.mp3", "mp3"),
        ("call.FLAC", "mp3"),
        ("call.wav", "mp3"),
        ("call.m4a", "mp3"),
        ("call.aac", "mp3"),
        ("screen.mp4", "mp4"),
        ("screen.MOV", "mp4"),
        ("screen.webm", "mp4"),
        ("notes.txt", "mp4"),
        ("no_extension", "mp4"),
    ],
)
def test_infer_file_type(name, expected):
    assert infer_file_type(name) == expected


# =============================================================================
# FORMATTING TESTS
# =============================================================================


@pytest.mark.unit
def test_format_upload_title():
    title = format_upload_title(datetime(2025, 10, 12, 18, 30, 45))

    assert title == "Recording 2025-10-12 18:30:45"


@pytest.mark.unit
def test_format_upload_title_custom_prefix():
    title = format_upload_title(datetime(2025, 1, 2, 3, 4, 5), prefix="Call")

    assert title == "Call 2025-01-02 03:04:05"


@pytest.mark.unit
def test_utc_timestamp_converts_to_utc():
    moment = datetime(2025, 10, 12, 20, 30, tzinfo=timezone(timedelta(hours=2)))

    assert utc_timestamp(moment) == "2025-10-12T18:30:00+00:00"


@pytest.mark.unit
def test_format_view_url_contains_file_id():
    assert "fileId=file-42" in format_view_url("file-42")


# =============================================================================
# UPLOAD STATE TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "state, text",
    [
        (UploadState.idle(), "Ready"),
        (UploadState.creating_file(), "Creating file entry..."),
        (UploadState.uploading(0), "Uploading... 0%"),
        (UploadState.uploading(100), "Uploading... 100%"),
        (UploadState.creating_metadata(), "Creating metadata..."),
        (UploadState.complete("f"), "Upload complete!"),
        (UploadState.failed("Network error: boom"), "Upload failed: Network error: boom"),
    ],
)
def test_display_text(state, text):
    assert state.display_text() == text


@pytest.mark.unit
def test_uploading_percent_is_clamped():
    assert UploadState.uploading(150).percent == 100
    assert UploadState.uploading(-5).percent == 0


@pytest.mark.unit
def test_only_complete_and_failed_are_terminal():
    terminal = {
        status
        for status in UploadStatus
        if UploadState(status).is_terminal
    }

    assert terminal == {UploadStatus.COMPLETE, UploadStatus.FAILED}


@pytest.mark.unit
def test_completed_file_id_only_when_complete():
    assert UploadState.complete("file-42").completed_file_id == "file-42"
    assert UploadState.failed("x").completed_file_id is None
