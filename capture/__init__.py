"""
Capture Module

Command-driven capture, recording and upload coordination.

Public API:
    - CaptureOrchestrator: Single-consumer command loop
    - CaptureCommand: Commands accepted by the loop
    - CaptureState: Derived capture state
    - create_capture_backend: Factory for capture collaborators

Usage:
    from capture import CaptureCommand, CaptureOrchestrator

    orchestrator = CaptureOrchestrator(commands, engine, recorder, picker,
                                       shared_state, uploader)
    threading.Thread(target=orchestrator.run, daemon=True).start()
    commands.put(CaptureCommand.SELECT_SOURCE)
"""

from capture.constants import CaptureCommand, CaptureState, SourceKind
from capture.controllers.capture_orchestrator import CaptureOrchestrator, CaptureSession
from capture.factory import CaptureBackend, create_capture_backend
from capture.interfaces.capture_engine_interface import CaptureError

# Public API
__all__ = [
    "CaptureBackend",
    "CaptureCommand",
    "CaptureError",
    "CaptureOrchestrator",
    "CaptureSession",
    "CaptureState",
    "SourceKind",
    "create_capture_backend",
]
