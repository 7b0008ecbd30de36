"""
Capture Orchestrator

Single long-lived command loop owning all capture and recording state.

Other components talk to it only through:
- the command queue (any number of producers), and
- the picker cell (PendingResult), filled out-of-band by the source picker.

Each iteration:
    1. Take a pending picker result, if any (checked before every command)
    2. Wait up to COMMAND_POLL_TIMEOUT for a command (a timeout is normal)
    3. Dispatch the command

State Flow:
    IDLE -> SOURCE_SELECTED -> CAPTURING -> RECORDING -> IDLE (after stop)

A completed recording is uploaded on a worker thread while a monitor thread
mirrors the job's status channel into SharedState, so the loop keeps
serving commands during the upload.

Only the newest upload generation may write SharedState. Starting another
upload advances the generation, as do SELECT_SOURCE and CANCEL_RECORDING;
an older job still running then finishes without touching the display.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from auth.controllers.session_manager import SessionManager
from auth.errors import InvalidTokenError
from auth.models import Credential
from capture.constants import (
    LOGIN_REQUIRED_NOTICE,
    PREPARING_UPLOAD_NOTICE,
    TERMINAL_COMMANDS,
    CaptureCommand,
    CaptureState,
)
from capture.interfaces.capture_engine_interface import (
    CaptureEngineInterface,
    CaptureError,
    ContentFilter,
    PickerResult,
    RecordingConfig,
    RecordingEngineInterface,
    SourcePickerInterface,
    StreamConfig,
)
from capture.utils.capture_utils import delete_recording, format_picked_source
from config.settings import (
    COMMAND_POLL_TIMEOUT,
    DEFAULT_CAPTURE_HEIGHT,
    DEFAULT_CAPTURE_WIDTH,
    LOGIN_NOTICE_SECONDS,
    NO_SOURCE_LABEL,
    UPLOAD_MONITOR_INTERVAL,
)
from core.observable import Observable
from core.pending_result import PendingResult
from core.shared_state import SharedState
from upload.constants import UploadState, UploadStatus
from upload.controllers.upload_pipeline import UploadPipeline
from upload.factory import create_upload_pipeline
from upload.interfaces.uploader_interface import UploaderInterface
from upload.utils.upload_utils import format_view_url


@dataclass
class CaptureSession:
    """
    Capture state owned by the orchestrator thread.

    Invariant: is_recording implies is_capturing. A filter without a
    stream is a pending selection.
    """

    stream: Optional[Any] = None
    content_filter: Optional[ContentFilter] = None
    capture_size: tuple = (DEFAULT_CAPTURE_WIDTH, DEFAULT_CAPTURE_HEIGHT)
    is_capturing: bool = False
    is_recording: bool = False
    source_name: str = NO_SOURCE_LABEL
    recording_path: Optional[Path] = None

    @property
    def state(self) -> CaptureState:
        if self.is_recording:
            return CaptureState.RECORDING
        if self.is_capturing:
            return CaptureState.CAPTURING
        if self.content_filter is not None:
            return CaptureState.SOURCE_SELECTED
        return CaptureState.IDLE


@dataclass
class UploadTask:
    """One upload job: the worker running it and the monitor mirroring it."""

    generation: int
    worker: threading.Thread
    monitor: threading.Thread

    def is_alive(self) -> bool:
        return self.worker.is_alive() or self.monitor.is_alive()

    def join(self, timeout: Optional[float] = None) -> None:
        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in (self.worker, self.monitor):
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            thread.join(timeout=remaining)


class CaptureOrchestrator:
    """
    Command loop coordinating capture, recording and upload.

    Usage:
        commands = queue.Queue()
        orchestrator = CaptureOrchestrator(
            commands, engine, recorder, picker, shared_state,
            uploader=StorageUploader(), session_manager=manager,
        )
        threading.Thread(target=orchestrator.run, daemon=True).start()

        commands.put(CaptureCommand.SELECT_SOURCE)
    """

    def __init__(
        self,
        command_queue: "queue.Queue[CaptureCommand]",
        capture_engine: CaptureEngineInterface,
        recording_engine: RecordingEngineInterface,
        picker: SourcePickerInterface,
        shared_state: SharedState,
        uploader: UploaderInterface,
        session_manager: Optional[SessionManager] = None,
        stream_config: Optional[StreamConfig] = None,
        recording_config: Optional[RecordingConfig] = None,
        monitor_interval: float = UPLOAD_MONITOR_INTERVAL,
        login_notice_seconds: float = LOGIN_NOTICE_SECONDS,
    ):
        """
        Initialize orchestrator.

        Args:
            command_queue: Queue the loop consumes commands from
            capture_engine: Live stream collaborator
            recording_engine: File recording collaborator
            picker: Asynchronous source picker
            shared_state: Observables shared with the presentation layer
            uploader: Storage uploader used for finished recordings
            session_manager: Refreshes the credential before each upload
            stream_config: Stream parameters (size replaced per selection)
            recording_config: Output location for recordings
            monitor_interval: Upload monitor poll cadence (seconds)
            login_notice_seconds: How long the login notice stays visible
        """
        self.logger = logging.getLogger(__name__)

        self.command_queue = command_queue
        self.capture_engine = capture_engine
        self.recording_engine = recording_engine
        self.picker = picker
        self.shared_state = shared_state
        self.uploader = uploader
        self.session_manager = session_manager
        self.stream_config = stream_config or StreamConfig()
        self.recording_config = recording_config or RecordingConfig()
        self.monitor_interval = monitor_interval
        self.login_notice_seconds = login_notice_seconds

        self.picker_cell: PendingResult[PickerResult] = PendingResult()
        self.session = CaptureSession()

        # Upload task tracking (every job still in flight)
        self.upload_tasks: List[UploadTask] = []
        self._upload_generation = 0
        self._upload_lock = threading.Lock()
        self._notice_timer: Optional[threading.Timer] = None

        self._handlers = {
            CaptureCommand.SELECT_SOURCE: self._handle_select_source,
            CaptureCommand.START_CAPTURE: self._handle_start_capture,
            CaptureCommand.STOP_CAPTURE: self._handle_stop_capture,
            CaptureCommand.START_RECORDING: self._handle_start_recording,
            CaptureCommand.STOP_RECORDING: self._handle_stop_recording,
            CaptureCommand.CANCEL_RECORDING: self._handle_cancel_recording,
            CaptureCommand.STATUS: self._handle_status,
        }

        self.logger.info("Capture Orchestrator initialized")

    # =========================================================================
    # LOOP
    # =========================================================================

    def run(self) -> CaptureCommand:
        """
        Run the command loop until QUIT or LOGOUT.

        Returns:
            The command that ended the loop
        """
        self.logger.info("🎬 Capture loop started")
        while True:
            command = self.step()
            if command in TERMINAL_COMMANDS:
                self._shutdown()
                self.logger.info(f"Capture loop ended ({command.value})")
                return command

    def step(self, timeout: float = COMMAND_POLL_TIMEOUT) -> Optional[CaptureCommand]:
        """
        Run one loop iteration.

        Returns:
            The command handled, or None if the wait timed out
        """
        self._check_picker()

        try:
            command = self.command_queue.get(timeout=timeout)
        except queue.Empty:
            return None

        self.handle_command(command)
        return command

    def send(self, command: CaptureCommand) -> None:
        """Enqueue a command (any thread)."""
        self.command_queue.put(command)

    def handle_command(self, command: CaptureCommand) -> None:
        """Dispatch one command. QUIT and LOGOUT are handled by run()."""
        self.logger.debug(f"Command: {command.value} (state: {self.session.state.value})")
        handler = self._handlers.get(command)
        if handler is not None:
            handler()

    # =========================================================================
    # PICKER RESULTS
    # =========================================================================

    def _check_picker(self) -> None:
        result = self.picker_cell.take()
        if result is None:
            return

        self.session.source_name = format_picked_source(result.source)
        self.logger.info(f"✅ Source selected: {self.session.source_name}")

        if self.session.is_capturing and self.session.stream is not None:
            try:
                self.capture_engine.update_filter(self.session.stream, result.filter)
                self.session.content_filter = result.filter
                self.logger.info("🔄 Updated capture filter to new source")
            except CaptureError as e:
                self.logger.warning(f"⚠️ Failed to update capture filter: {e}")
        else:
            self.session.content_filter = result.filter
            self.session.capture_size = (result.width, result.height)
            self._start_capture()

        self._publish()

    # =========================================================================
    # COMMAND HANDLERS
    # =========================================================================

    def _handle_select_source(self) -> None:
        self._cancel_notice_timer()
        self._clear_upload_status()

        if self.session.stream is not None:
            self.picker.open_picker_for_stream(self.picker_cell, self.session.stream)
        else:
            self.picker.open_picker(self.picker_cell)
        self.logger.info("📺 Opening content picker...")

    def _handle_start_capture(self) -> None:
        if self.session.content_filter is None:
            self.logger.warning("⚠️ No source selected. Please select a source first.")
            return
        if self.session.is_capturing:
            self.logger.info("Already capturing")
            return

        self._start_capture()
        self._publish()

    def _handle_stop_capture(self) -> None:
        if self.session.is_recording:
            self.logger.warning("⚠️ Cannot stop capture while recording")
            return

        self._stop_capture()
        self._clear_source()
        self._publish()
        self.logger.info("🔄 Source detached, ready to select new source")

    def _handle_start_recording(self) -> None:
        if not self.session.is_capturing or self.session.stream is None:
            self.logger.warning("⚠️ Cannot start recording - not capturing")
            return
        if self.session.is_recording:
            self.logger.warning("Already recording")
            return

        try:
            path = self.recording_engine.start_recording(
                self.session.stream,
                self.recording_config,
            )
        except CaptureError as e:
            self.logger.error(f"❌ Failed to start recording: {e}")
            return

        self.session.is_recording = True
        self.session.recording_path = path
        self._publish()
        self.logger.info(f"⏺ Recording started: {path}")

    def _handle_stop_recording(self) -> None:
        path = self._finish_recording()
        if path is None:
            return

        self.logger.info(f"✅ Recording stopped and saved: {path}")
        self._stop_capture()
        self._clear_source()
        self._publish()
        self.logger.info("🔄 Source cleared, ready for next recording")

        self._begin_upload(path)

    def _handle_cancel_recording(self) -> None:
        path = self._finish_recording()
        if path is None:
            return

        self.logger.info(f"🗑️ Deleting recording: {path}")
        if delete_recording(path):
            self.logger.info("✅ Recording file deleted")

        self._stop_capture()
        self._clear_source()
        self._publish()

        # No upload for a cancelled recording
        self._cancel_notice_timer()
        self._clear_upload_status()

    def _handle_status(self) -> None:
        status = self.get_status()
        self.logger.info("📊 Status:")
        for key, value in status.items():
            self.logger.info(f"   {key}: {value}")

    # =========================================================================
    # CAPTURE HELPERS
    # =========================================================================

    def _start_capture(self) -> None:
        if self.session.content_filter is None:
            return

        if self.session.stream is not None:
            self.capture_engine.stop_capture(self.session.stream)
            self.session.stream = None

        width, height = self.session.capture_size
        try:
            self.session.stream = self.capture_engine.start_capture(
                self.session.content_filter,
                self.session.capture_size,
                self.stream_config.sized(width, height),
            )
        except CaptureError as e:
            self.session.is_capturing = False
            self.logger.warning(f"⚠️ Failed to start capture: {e}")
            return

        self.session.is_capturing = True
        self.logger.info(f"▶️ Capture started ({width}x{height})")

    def _stop_capture(self) -> None:
        if self.session.stream is not None:
            self.capture_engine.stop_capture(self.session.stream)
            self.session.stream = None
        self.session.is_capturing = False

    def _clear_source(self) -> None:
        self.session.source_name = NO_SOURCE_LABEL
        self.session.content_filter = None

    def _finish_recording(self) -> Optional[Path]:
        """Stop the recording engine; None if there was nothing to stop."""
        if self.session.stream is None:
            self.logger.warning("⚠️ No active stream")
            return None

        path = self.recording_engine.stop_recording(self.session.stream)
        if path is None:
            self.logger.warning("⚠️ No recording to stop")
            return None

        self.session.is_recording = False
        self.session.recording_path = None
        return path

    def _publish(self) -> None:
        self.shared_state.is_capturing.set(self.session.is_capturing)
        self.shared_state.is_recording.set(self.session.is_recording)
        self.shared_state.source_name.set(self.session.source_name)

    # =========================================================================
    # UPLOAD
    # =========================================================================

    def _begin_upload(self, path: Path) -> None:
        credential = self.shared_state.credential.get()
        if credential is None:
            self.logger.warning("⚠️ No authentication tokens available for upload")
            self._show_login_notice()
            return

        self.logger.info("🚀 Starting upload...")
        self._prune_upload_tasks()

        with self._upload_lock:
            # Earlier jobs keep running but stop writing shared state
            self._upload_generation += 1
            generation = self._upload_generation
            self.shared_state.uploaded_file_id.set("")
            self.shared_state.notice.set(PREPARING_UPLOAD_NOTICE)

        job_status: Observable[UploadState] = Observable(
            UploadState.idle(),
            name=f"upload_job_{generation}",
        )
        channel = job_status.subscribe()
        pipeline = create_upload_pipeline(self.uploader, job_status)

        worker = threading.Thread(
            target=self._upload_worker,
            args=(pipeline, credential, path),
            daemon=True,
            name=f"UploadWorker-{generation}",
        )
        monitor = threading.Thread(
            target=self._monitor_worker,
            args=(job_status, channel, worker, generation),
            daemon=True,
            name=f"UploadMonitor-{generation}",
        )
        self.upload_tasks.append(UploadTask(generation, worker, monitor))
        worker.start()
        monitor.start()

    def _upload_worker(
        self,
        pipeline: UploadPipeline,
        credential: Credential,
        path: Path,
    ) -> None:
        """Refresh the credential once, then run the pipeline."""
        try:
            if self.session_manager is not None:
                credential = self.session_manager.ensure_fresh(credential)
        except InvalidTokenError as e:
            self.logger.error(f"❌ Cannot upload: {e}")
            pipeline.status.set(UploadState.failed(str(e)))
            return

        try:
            pipeline.run(credential.access_token, path)
        except Exception as e:
            self.logger.error(f"Upload task crashed: {e}", exc_info=True)
            pipeline.status.set(UploadState.failed(str(e)))

    def _monitor_worker(
        self,
        job_status: Observable,
        channel: "queue.Queue[UploadState]",
        worker: threading.Thread,
        generation: int,
    ) -> None:
        """Mirror job status into shared state until Complete or Failed."""
        try:
            while True:
                try:
                    state = channel.get(timeout=self.monitor_interval)
                except queue.Empty:
                    if not worker.is_alive() and channel.empty():
                        state = job_status.get()
                        if not state.is_terminal:
                            state = UploadState.failed("Upload task ended unexpectedly")
                    else:
                        continue

                shown = self._mirror_upload_state(state, generation)
                if state.is_terminal:
                    suffix = "" if shown else " (superseded, not shown)"
                    self.logger.info(f"📊 Upload finished: {state.display_text()}{suffix}")
                    return
        finally:
            job_status.unsubscribe(channel)

    def _mirror_upload_state(self, state: UploadState, generation: int) -> bool:
        """
        Copy one job transition into shared state.

        Returns:
            False if a newer generation owns the display (nothing written)
        """
        with self._upload_lock:
            if generation != self._upload_generation:
                return False

            if state.status != UploadStatus.IDLE:
                self.shared_state.notice.update(
                    lambda notice: "" if notice == PREPARING_UPLOAD_NOTICE else notice,
                )
            self.shared_state.upload_status.set(state)

            file_id = state.completed_file_id
            if file_id:
                self.shared_state.uploaded_file_id.set(file_id)

        if file_id:
            self.logger.info(f"🔗 View recording: {format_view_url(file_id)}")
        return True

    def _clear_upload_status(self) -> None:
        """Back to Idle and detach any job still running from the display."""
        with self._upload_lock:
            self._upload_generation += 1
            self.shared_state.clear_upload()

    def _show_login_notice(self) -> None:
        self._cancel_notice_timer()
        self.shared_state.notice.set(LOGIN_REQUIRED_NOTICE)

        self._notice_timer = threading.Timer(
            self.login_notice_seconds,
            self._clear_login_notice,
        )
        self._notice_timer.daemon = True
        self._notice_timer.start()

    def _clear_login_notice(self) -> None:
        self.shared_state.notice.update(
            lambda notice: "" if notice == LOGIN_REQUIRED_NOTICE else notice,
        )

    def _cancel_notice_timer(self) -> None:
        if self._notice_timer is not None:
            self._notice_timer.cancel()
            self._notice_timer = None

    def wait_for_upload(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every upload in flight and its monitor finish.

        Args:
            timeout: Overall limit for all jobs together (None = no limit)

        Returns:
            True if nothing is left running
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        for task in list(self.upload_tasks):
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            task.join(timeout=remaining)

        self._prune_upload_tasks()
        return not self.is_uploading()

    def is_uploading(self) -> bool:
        return any(task.is_alive() for task in self.upload_tasks)

    def _prune_upload_tasks(self) -> None:
        self.upload_tasks = [task for task in self.upload_tasks if task.is_alive()]

    # =========================================================================
    # STATUS / SHUTDOWN
    # =========================================================================

    def get_status(self) -> Dict[str, Any]:
        """
        Get comprehensive orchestrator status.

        Returns:
            Dictionary with status information
        """
        status = self.shared_state.snapshot()
        status["capture_state"] = self.session.state.value
        status["capture_size"] = "x".join(str(v) for v in self.session.capture_size)
        status["recording_path"] = str(self.session.recording_path or "")
        status["upload_in_flight"] = self.is_uploading()

        if self.session.stream is not None:
            status["frames"] = self.capture_engine.frame_count(self.session.stream)
        return status

    def _shutdown(self) -> None:
        """Release the stream on exit; a running recording is kept on disk."""
        self._cancel_notice_timer()

        if self.session.is_recording:
            path = self._finish_recording()
            if path is not None:
                self.logger.info(f"Recording kept without upload: {path}")

        if self.session.stream is not None:
            self._stop_capture()
            self._clear_source()
            self._publish()
