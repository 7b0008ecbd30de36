"""
Capture Implementations Package

Simulated capture collaborators.
"""

from capture.implementations.mock_capture import (
    MockCaptureEngine,
    MockRecordingEngine,
    MockSourcePicker,
)

__all__ = [
    "MockCaptureEngine",
    "MockRecordingEngine",
    "MockSourcePicker",
]
