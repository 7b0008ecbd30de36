"""
Capture Controllers Package

The command loop coordinating capture, recording and upload.
"""

from capture.controllers.capture_orchestrator import CaptureOrchestrator, CaptureSession

# Public API
__all__ = [
    "CaptureOrchestrator",
    "CaptureSession",
]
