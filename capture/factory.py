"""
Capture Factory

Factory pattern for creating capture collaborators.
Follows same pattern as upload/factory.py for consistency.

The platform capture engine is provided by the host application; this
package only ships the simulated collaborators. The factory is the single
place that decides which set the orchestrator gets.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from capture.implementations.mock_capture import (
    MockCaptureEngine,
    MockRecordingEngine,
    MockSourcePicker,
)
from capture.interfaces.capture_engine_interface import (
    CaptureEngineInterface,
    RecordingEngineInterface,
    SourcePickerInterface,
)

# Type alias for better type hints
CaptureMode = Literal["auto", "mock"]

_logger = logging.getLogger(__name__)


@dataclass
class CaptureBackend:
    """The three collaborators the orchestrator drives."""

    capture_engine: CaptureEngineInterface
    recording_engine: RecordingEngineInterface
    picker: SourcePickerInterface


def create_capture_backend(
    mode: CaptureMode = "auto",
    backend: Optional[CaptureBackend] = None,
) -> CaptureBackend:
    """
    Create capture collaborators.

    Args:
        mode: "auto" (use the supplied platform backend if any, else mock)
              or "mock" (force simulation)
        backend: Platform backend supplied by the host application

    Example:
        backend = create_capture_backend()
        orchestrator = CaptureOrchestrator(
            commands, backend.capture_engine, backend.recording_engine,
            backend.picker, shared_state, uploader,
        )
    """
    if mode == "auto" and backend is not None:
        _logger.info("Using platform capture backend")
        return backend

    if mode == "auto":
        _logger.warning("No platform capture backend supplied, using Mock Capture")
    else:
        _logger.info("Creating Mock Capture (forced)")

    return CaptureBackend(
        capture_engine=MockCaptureEngine(),
        recording_engine=MockRecordingEngine(),
        picker=MockSourcePicker(),
    )
