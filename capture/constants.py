"""
Capture Constants

Enums for the capture command loop.

Note: Timing and size values live in config/settings.py. This file only
holds command and state enums.
"""

from enum import Enum


class CaptureCommand(Enum):
    """
    Commands accepted by the capture orchestrator.

    Any number of producers (UI, control file, tests) may enqueue these;
    the orchestrator is the only consumer.
    """

    SELECT_SOURCE = "select_source"
    START_CAPTURE = "start_capture"
    STOP_CAPTURE = "stop_capture"
    START_RECORDING = "start_recording"
    STOP_RECORDING = "stop_recording"
    CANCEL_RECORDING = "cancel_recording"
    STATUS = "status"
    QUIT = "quit"
    LOGOUT = "logout"


# Commands that end the orchestrator loop
TERMINAL_COMMANDS = (CaptureCommand.QUIT, CaptureCommand.LOGOUT)


class CaptureState(Enum):
    """
    Derived orchestrator state.

    State Flow:
        IDLE -> SOURCE_SELECTED -> CAPTURING -> RECORDING -> IDLE (stopped)
    """

    IDLE = "idle"  # No source
    SOURCE_SELECTED = "source_selected"  # Filter held, no stream
    CAPTURING = "capturing"  # Stream live
    RECORDING = "recording"  # Stream live and writing to file


class SourceKind(Enum):
    """What a content filter captures"""

    DISPLAY = "display"
    WINDOW = "window"
    APPLICATION = "application"


# User-facing messages
LOGIN_REQUIRED_NOTICE = "Please log in to upload recordings"
PREPARING_UPLOAD_NOTICE = "Preparing your recording"
