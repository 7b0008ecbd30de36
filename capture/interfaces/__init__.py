"""
Capture Interfaces Package

Exposes abstract interfaces for the capture collaborators.
"""

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

# Public API
__all__ = [
    "CaptureEngineInterface",
    "CaptureError",
    "ContentFilter",
    "FrameSurface",
    "PickedSource",
    "PickerResult",
    "RecordingConfig",
    "RecordingEngineInterface",
    "SourcePickerInterface",
    "StreamConfig",
]
