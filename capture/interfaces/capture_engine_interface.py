"""
Capture Engine Interfaces

Abstract interfaces for the screen-capture collaborators the orchestrator
drives. The real engine is platform glue; the orchestrator only ever sees
these contracts.

This demonstrates Dependency Inversion Principle - the command loop
depends on these abstractions, not on any OS capture framework.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from capture.constants import SourceKind
from config.settings import (
    CAPTURE_FPS,
    CAPTURE_SHOWS_CURSOR,
    DEFAULT_CAPTURE_HEIGHT,
    DEFAULT_CAPTURE_WIDTH,
    RECORDING_FILE_EXTENSION,
    RECORDING_FILENAME_FORMAT,
    RECORDINGS_DIR,
)
from core.pending_result import PendingResult


@dataclass(frozen=True)
class ContentFilter:
    """Opaque descriptor of which screen, window or application is captured."""

    kind: SourceKind
    identifier: str


@dataclass(frozen=True)
class PickedSource:
    """What the user picked, for display purposes."""

    kind: SourceKind
    name: str
    app_name: str = ""


@dataclass(frozen=True)
class PickerResult:
    """Deposited by the source picker when the user completes a selection."""

    filter: ContentFilter
    width: int
    height: int
    source: PickedSource


@dataclass(frozen=True)
class StreamConfig:
    """Stream parameters passed to the capture engine."""

    width: int = DEFAULT_CAPTURE_WIDTH
    height: int = DEFAULT_CAPTURE_HEIGHT
    fps: int = CAPTURE_FPS
    shows_cursor: bool = CAPTURE_SHOWS_CURSOR

    def sized(self, width: int, height: int) -> "StreamConfig":
        return replace(self, width=width, height=height)


@dataclass(frozen=True)
class RecordingConfig:
    """Where and how the recording engine writes its output file."""

    output_dir: Path = RECORDINGS_DIR
    filename_format: str = RECORDING_FILENAME_FORMAT
    extension: str = RECORDING_FILE_EXTENSION


@dataclass(frozen=True)
class FrameSurface:
    """Snapshot of the latest captured frame."""

    width: int
    height: int


class CaptureEngineInterface(ABC):
    """
    Live screen-capture stream.

    Handles returned by start_capture are opaque to the orchestrator.
    """

    @abstractmethod
    def start_capture(
        self,
        content_filter: ContentFilter,
        size: tuple,
        config: StreamConfig,
    ) -> Any:
        """
        Start streaming the given source.

        Args:
            content_filter: Source to capture
            size: (width, height) of the stream
            config: Stream parameters

        Returns:
            Stream handle

        Raises:
            CaptureError: If the stream could not be started
        """

    @abstractmethod
    def stop_capture(self, handle: Any) -> None:
        """Stop a stream. Never raises for an already-stopped stream."""

    @abstractmethod
    def update_filter(self, handle: Any, content_filter: ContentFilter) -> None:
        """
        Point a live stream at a different source without restarting it.

        Raises:
            CaptureError: If the update was rejected
        """

    @abstractmethod
    def latest_frame(self, handle: Any) -> Optional[FrameSurface]:
        """Most recent frame, or None before the first frame arrives."""

    @abstractmethod
    def frame_count(self, handle: Any) -> int:
        """Frames received since the stream started."""


class RecordingEngineInterface(ABC):
    """Writes a live stream to a file."""

    @abstractmethod
    def start_recording(self, handle: Any, config: RecordingConfig) -> Path:
        """
        Start recording a stream.

        Returns:
            Path the recording is written to

        Raises:
            CaptureError: If recording could not start
        """

    @abstractmethod
    def stop_recording(self, handle: Any) -> Optional[Path]:
        """
        Finish the recording.

        Returns:
            Path of the completed file, or None if nothing was recording
        """


class SourcePickerInterface(ABC):
    """
    Asynchronous source picker.

    Both methods return immediately; the picker deposits a PickerResult
    into the cell whenever the user completes a selection.
    """

    @abstractmethod
    def open_picker(self, cell: PendingResult) -> None:
        """Show the picker with no stream running."""

    @abstractmethod
    def open_picker_for_stream(self, cell: PendingResult, handle: Any) -> None:
        """Show the picker for a live stream (hot-swap)."""


class CaptureError(Exception):
    """
    Exception raised by capture collaborators.

    Examples:
    - Screen recording permission missing
    - Source disappeared
    - Output directory not writable
    """
    pass
