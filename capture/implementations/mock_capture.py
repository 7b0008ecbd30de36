"""
Mock Capture Implementations

Simulated capture collaborators for testing without a real screen-capture
framework. Mimics the engine's behavior for unit tests.

These are "Fakes" (test doubles) - they have working logic but no real
screen, GPU or encoder behind them.
"""

import itertools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from capture.constants import SourceKind
from capture.interfaces.capture_engine_interface import (
    CaptureEngineInterface,
    CaptureError,
    ContentFilter,
    FrameSurface,
    PickedSource,
    PickerResult,
    RecordingConfig,
    RecordingEngineInterface,
    SourcePickerInterface,
    StreamConfig,
)
from capture.utils.capture_utils import generate_filename
from core.pending_result import PendingResult

# Minimal MP4 header written into fake recordings
FAKE_MP4_HEADER = b'\x00\x00\x00\x20ftypmp42'


@dataclass
class MockStream:
    """Handle returned by MockCaptureEngine."""

    stream_id: int
    content_filter: ContentFilter
    size: tuple
    config: StreamConfig
    active: bool = True
    frames: int = 0


class MockCaptureEngine(CaptureEngineInterface):
    """
    Mock capture engine.

    Usage:
        engine = MockCaptureEngine()
        handle = engine.start_capture(content_filter, (1280, 720), StreamConfig())
        engine.pump_frames(handle, 30)
        engine.stop_capture(handle)
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._ids = itertools.count(1)

        # Streams in start order, for assertions
        self.streams: List[MockStream] = []

        # Configuration for test scenarios
        self.should_fail_start = False
        self.should_fail_update = False

        self.logger.info("Mock Capture Engine initialized")

    def start_capture(
        self,
        content_filter: ContentFilter,
        size: tuple,
        config: StreamConfig,
    ) -> MockStream:
        if self.should_fail_start:
            self.logger.error("[MOCK] Simulated capture start failure")
            raise CaptureError("Simulated capture failure")

        stream = MockStream(next(self._ids), content_filter, size, config)
        self.streams.append(stream)
        self.logger.info(
            f"[MOCK] Capture started: {content_filter.identifier} "
            f"({size[0]}x{size[1]} @ {config.fps} fps)",
        )
        return stream

    def stop_capture(self, handle: Any) -> None:
        if handle.active:
            handle.active = False
            self.logger.info(f"[MOCK] Capture stopped (stream {handle.stream_id})")

    def update_filter(self, handle: Any, content_filter: ContentFilter) -> None:
        if self.should_fail_update:
            raise CaptureError("Simulated filter update failure")
        handle.content_filter = content_filter
        self.logger.info(f"[MOCK] Filter updated: {content_filter.identifier}")

    def latest_frame(self, handle: Any) -> Optional[FrameSurface]:
        if not handle.active or handle.frames == 0:
            return None
        return FrameSurface(width=handle.size[0], height=handle.size[1])

    def frame_count(self, handle: Any) -> int:
        return handle.frames

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def pump_frames(self, handle: Any, count: int = 1) -> None:
        """Pretend the stream delivered frames."""
        if handle.active:
            handle.frames += count

    def active_streams(self) -> List[MockStream]:
        return [stream for stream in self.streams if stream.active]


class MockRecordingEngine(RecordingEngineInterface):
    """
    Mock recording engine.

    Creates real (tiny) files so upload and delete logic can be tested.
    """

    def __init__(self, payload_size: int = 1024):
        """
        Initialize mock recording engine.

        Args:
            payload_size: Bytes of fake video written after the header
        """
        self.logger = logging.getLogger(__name__)
        self.payload_size = payload_size
        self._current: Optional[Path] = None

        # Completed recordings, for assertions
        self.recordings: List[Path] = []

        # Configuration for test scenarios
        self.should_fail_start = False

    def start_recording(self, handle: Any, config: RecordingConfig) -> Path:
        if self.should_fail_start:
            self.logger.error("[MOCK] Simulated recording start failure")
            raise CaptureError("Simulated recording failure")

        if self._current is not None:
            raise CaptureError("Already recording")

        output_file = generate_filename(
            config.output_dir,
            config.filename_format,
            config.extension,
        )
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.touch()
        except OSError as e:
            raise CaptureError(f"Cannot create {output_file}: {e}") from e

        self._current = output_file
        self.logger.info(f"[MOCK] Recording started: {output_file}")
        return output_file

    def stop_recording(self, handle: Any) -> Optional[Path]:
        if self._current is None:
            self.logger.warning("[MOCK] Not recording")
            return None

        output_file, self._current = self._current, None
        with open(output_file, 'wb') as f:
            f.write(FAKE_MP4_HEADER)
            f.write(b'\x00' * self.payload_size)

        self.recordings.append(output_file)
        self.logger.info(f"[MOCK] Recording saved: {output_file}")
        return output_file

    @property
    def is_recording(self) -> bool:
        return self._current is not None


def default_picker_result() -> PickerResult:
    """A full-display selection, as a user would usually pick."""
    return PickerResult(
        filter=ContentFilter(SourceKind.DISPLAY, "display-1"),
        width=1920,
        height=1080,
        source=PickedSource(SourceKind.DISPLAY, "Built-in Display"),
    )


class MockSourcePicker(SourcePickerInterface):
    """
    Mock source picker.

    By default every open immediately deposits the next queued result,
    as if the user picked at once. Set auto_deposit = False to deposit
    manually with complete_selection().
    """

    def __init__(self, results: Optional[List[PickerResult]] = None):
        self.logger = logging.getLogger(__name__)
        self.results: List[PickerResult] = list(results or [])
        self.auto_deposit = True

        # ("cold" | "stream", cell) for each open, for assertions
        self.opened: List[tuple] = []

    def open_picker(self, cell: PendingResult) -> None:
        self.opened.append(("cold", cell))
        self.logger.info("[MOCK] Picker opened")
        if self.auto_deposit:
            self.complete_selection(cell)

    def open_picker_for_stream(self, cell: PendingResult, handle: Any) -> None:
        self.opened.append(("stream", cell))
        self.logger.info("[MOCK] Picker opened for live stream")
        if self.auto_deposit:
            self.complete_selection(cell)

    def complete_selection(
        self,
        cell: PendingResult,
        result: Optional[PickerResult] = None,
    ) -> None:
        """Deposit a selection into the cell."""
        if result is None:
            result = self.results.pop(0) if self.results else default_picker_result()
        cell.deposit(result)
