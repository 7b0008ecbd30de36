"""
Mock Capture Tests

Tests for the simulated capture collaborators, so orchestrator tests can
rely on their behavior.

To run:
    pytest tests/capture/test_mock_capture.py -v
"""

import pytest

from capture.constants import SourceKind
from capture.factory import CaptureBackend, create_capture_backend
from capture.implementations.mock_capture import (
    FAKE_MP4_HEADER,
    MockCaptureEngine,
    MockRecordingEngine,
    MockSourcePicker,
    default_picker_result,
)
from capture.interfaces.capture_engine_interface import (
    CaptureError,
    ContentFilter,
    RecordingConfig,
    StreamConfig,
)
from core.pending_result import PendingResult

DISPLAY = ContentFilter(SourceKind.DISPLAY, "display-1")

# =============================================================================
# CAPTURE ENGINE TESTS
# =============================================================================


@pytest.mark.unit
def test_capture_engine_stream_lifecycle(capture_engine):
    handle = capture_engine.start_capture(DISPLAY, (1280, 720), StreamConfig())

    assert capture_engine.latest_frame(handle) is None

    capture_engine.pump_frames(handle, 3)
    frame = capture_engine.latest_frame(handle)
    assert frame.width == 1280
    assert capture_engine.frame_count(handle) == 3

    capture_engine.stop_capture(handle)
    assert capture_engine.active_streams() == []
    assert capture_engine.latest_frame(handle) is None


@pytest.mark.unit
def test_capture_engine_simulated_failure():
    engine = MockCaptureEngine()
    engine.should_fail_start = True

    with pytest.raises(CaptureError):
        engine.start_capture(DISPLAY, (1280, 720), StreamConfig())


# =============================================================================
# RECORDING ENGINE TESTS
# =============================================================================


@pytest.mark.unit
def test_recording_engine_writes_file(tmp_path):
    engine = MockRecordingEngine(payload_size=64)
    config = RecordingConfig(output_dir=tmp_path)

    path = engine.start_recording(object(), config)
    assert engine.is_recording

    saved = engine.stop_recording(object())

    assert saved == path
    assert saved.read_bytes().startswith(FAKE_MP4_HEADER)
    assert saved.stat().st_size == len(FAKE_MP4_HEADER) + 64
    assert saved.name.startswith("recording_")
    assert saved.suffix == ".mp4"


@pytest.mark.unit
def test_recording_engine_rejects_double_start(tmp_path):
    engine = MockRecordingEngine()
    config = RecordingConfig(output_dir=tmp_path)
    engine.start_recording(object(), config)

    with pytest.raises(CaptureError):
        engine.start_recording(object(), config)


@pytest.mark.unit
def test_recording_engine_stop_without_start_returns_none(recording_engine):
    assert recording_engine.stop_recording(object()) is None


@pytest.mark.unit
def test_back_to_back_recordings_get_distinct_files(tmp_path):
    """Fixed filename format: two recordings within one second must not collide."""
    engine = MockRecordingEngine(payload_size=8)
    config = RecordingConfig(output_dir=tmp_path, filename_format="recording_fixed")

    first = engine.start_recording(object(), config)
    engine.stop_recording(object())
    second = engine.start_recording(object(), config)
    engine.stop_recording(object())

    assert first != second
    assert first.exists() and second.exists()


# =============================================================================
# SOURCE PICKER TESTS
# =============================================================================


@pytest.mark.unit
def test_picker_deposits_default_result():
    picker = MockSourcePicker()
    cell = PendingResult()

    picker.open_picker(cell)

    assert cell.take() == default_picker_result()
    assert cell.is_empty()


@pytest.mark.unit
def test_picker_manual_selection():
    picker = MockSourcePicker()
    picker.auto_deposit = False
    cell = PendingResult()

    picker.open_picker_for_stream(cell, handle=object())
    assert cell.is_empty()

    picker.complete_selection(cell)
    assert cell.take() is not None
    assert picker.opened[0][0] == "stream"


# =============================================================================
# FACTORY TESTS
# =============================================================================


@pytest.mark.unit
def test_factory_defaults_to_mock_backend():
    backend = create_capture_backend()

    assert isinstance(backend.capture_engine, MockCaptureEngine)
    assert isinstance(backend.recording_engine, MockRecordingEngine)
    assert isinstance(backend.picker, MockSourcePicker)


@pytest.mark.unit
def test_factory_uses_supplied_backend():
    supplied = CaptureBackend(
        MockCaptureEngine(),
        MockRecordingEngine(),
        MockSourcePicker(),
    )

    assert create_capture_backend(backend=supplied) is supplied
    assert create_capture_backend(mode="mock", backend=supplied) is not supplied
