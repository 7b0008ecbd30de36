"""
Shared State

One explicit struct holding everything the presentation layer and the
backend workers share. Created once at startup and passed by reference to
both sides - there are no module-level globals.

Each field is its own Observable with its own lock (fine-grained locking).
Readers get copies; only the owning component writes a field:

    Field               Writer
    -----------------   ------------------------------------------
    credential          SessionManager
    auth_state          SessionManager
    is_capturing        CaptureOrchestrator
    is_recording        CaptureOrchestrator
    source_name         CaptureOrchestrator
    upload_status       CaptureOrchestrator / upload monitor
    uploaded_file_id    upload monitor
    notice              CaptureOrchestrator
    meeting_events      MeetingEventsPoller
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from auth.constants import AuthState
from auth.models import Credential
from config.settings import NO_SOURCE_LABEL
from core.observable import Observable
from upload.constants import UploadState


def _observable(initial: Any, name: str):
    return field(default_factory=lambda: Observable(initial, name=name))


@dataclass
class SharedState:
    """
    Shared observables between UI and backend.

    Usage:
        state = SharedState()
        orchestrator = CaptureOrchestrator(..., shared_state=state)

        # UI side (polling)
        if state.is_recording.get():
            show_stop_button()
    """

    credential: Observable[Optional[Credential]] = _observable(None, "credential")
    auth_state: Observable[AuthState] = _observable(AuthState.checking(), "auth_state")
    is_capturing: Observable[bool] = _observable(False, "is_capturing")
    is_recording: Observable[bool] = _observable(False, "is_recording")
    source_name: Observable[str] = _observable(NO_SOURCE_LABEL, "source_name")
    upload_status: Observable[UploadState] = _observable(
        UploadState.idle(),
        "upload_status",
    )
    uploaded_file_id: Observable[str] = _observable("", "uploaded_file_id")
    notice: Observable[str] = _observable("", "notice")
    meeting_events: Observable[List[Any]] = field(
        default_factory=lambda: Observable([], name="meeting_events"),
    )

    def clear_upload(self) -> None:
        """Back to no upload shown (status Idle, no file id, no notice)."""
        self.upload_status.set(UploadState.idle())
        self.uploaded_file_id.set("")
        self.notice.set("")

    def snapshot(self) -> Dict[str, Any]:
        """
        Get a copy of everything the UI renders.

        Returns:
            Dictionary with status information
        """
        auth_state = self.auth_state.get()
        upload_status = self.upload_status.get()
        return {
            "authenticated": self.credential.get() is not None,
            "auth_stage": auth_state.stage.value,
            "user_code": auth_state.user_code,
            "verification_uri": auth_state.verification_uri,
            "is_capturing": self.is_capturing.get(),
            "is_recording": self.is_recording.get(),
            "source_name": self.source_name.get(),
            "upload_status": upload_status.status.value,
            "upload_message": self.notice.get() or upload_status.display_text(),
            "uploaded_file_id": self.uploaded_file_id.get(),
            "meeting_events": len(self.meeting_events.get()),
        }
