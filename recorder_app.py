"""
Recorder App

Main application coordinator for the desktop recorder.
This wires the session, capture, upload and meeting components together
around one SharedState instance.

Architecture:
- Authentication runs once on a background thread at startup
- The capture orchestrator owns all capture state on its own thread
- Meeting events refresh on a background thread
- The main loop (10 Hz) forwards remote commands from the control file

Threads:
    main            -> control file, shutdown
    Authenticator   -> SessionManager.authenticate()
    CaptureLoop     -> CaptureOrchestrator.run()
    MeetingEvents   -> MeetingEventsPoller
    UploadWorker    -> one per finished recording (spawned by the loop)

Remote control:
    echo "SELECT" > /tmp/recorder_control.cmd
    Commands: SELECT, CAPTURE, RELEASE, START, STOP, CANCEL, STATUS,
              QUIT, LOGOUT
"""

import logging
import logging.handlers
import queue
import signal
import sys
import threading
import time
from pathlib import Path
from typing import Optional

from auth import SessionManager, create_session_manager
from capture import (
    CaptureBackend,
    CaptureCommand,
    CaptureOrchestrator,
    create_capture_backend,
)
from config.settings import (
    CONTROL_FILE,
    LOG_DIR,
    LOG_SERVICE_FILE,
    SERVICE_LOOP_INTERVAL,
)
from core.shared_state import SharedState
from meetings import (
    MeetingEventsPoller,
    MeetingEventsProviderInterface,
    MockMeetingProvider,
)
from upload import UploaderInterface, create_uploader

# Control file keyword -> orchestrator command
REMOTE_COMMANDS = {
    "SELECT": CaptureCommand.SELECT_SOURCE,
    "CAPTURE": CaptureCommand.START_CAPTURE,
    "RELEASE": CaptureCommand.STOP_CAPTURE,
    "START": CaptureCommand.START_RECORDING,
    "STOP": CaptureCommand.STOP_RECORDING,
    "CANCEL": CaptureCommand.CANCEL_RECORDING,
    "STATUS": CaptureCommand.STATUS,
    "QUIT": CaptureCommand.QUIT,
    "LOGOUT": CaptureCommand.LOGOUT,
}


class RecorderApp:
    """
    Main application coordinator.

    Usage:
        app = RecorderApp()
        app.run()  # Blocks until QUIT, LOGOUT or a signal
    """

    def __init__(
        self,
        shared_state: Optional[SharedState] = None,
        session_manager: Optional[SessionManager] = None,
        uploader: Optional[UploaderInterface] = None,
        capture_backend: Optional[CaptureBackend] = None,
        meeting_provider: Optional[MeetingEventsProviderInterface] = None,
        control_file: str = CONTROL_FILE,
    ):
        """
        Initialize all components.

        Every argument is optional; defaults come from config/settings.py.
        Tests pass mocks.
        """
        self.logger = logging.getLogger(__name__)
        self.logger.info("Initializing Recorder App...")

        self.running = False
        self.exit_command: Optional[CaptureCommand] = None
        self.control_file = Path(control_file)

        # Shared between presentation layer and backend
        self.shared_state = shared_state or SharedState()
        self.commands: "queue.Queue[CaptureCommand]" = queue.Queue()

        # Session
        self.session_manager = session_manager or create_session_manager(
            self.shared_state,
        )

        # Capture and upload
        backend = create_capture_backend(backend=capture_backend)
        self.orchestrator = CaptureOrchestrator(
            command_queue=self.commands,
            capture_engine=backend.capture_engine,
            recording_engine=backend.recording_engine,
            picker=backend.picker,
            shared_state=self.shared_state,
            uploader=uploader or create_uploader(),
            session_manager=self.session_manager,
        )

        # Meetings
        self.meeting_poller = MeetingEventsPoller(
            meeting_provider or MockMeetingProvider(),
            self.shared_state,
        )

        self.auth_thread: Optional[threading.Thread] = None
        self.capture_thread: Optional[threading.Thread] = None

        self.logger.info("Recorder App initialized successfully")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self) -> None:
        """Start background threads (non-blocking)."""
        self.running = True

        self.auth_thread = threading.Thread(
            target=self.session_manager.authenticate,
            daemon=True,
            name="Authenticator",
        )
        self.auth_thread.start()

        self.meeting_poller.start()

        self.capture_thread = threading.Thread(
            target=self._capture_worker,
            daemon=True,
            name="CaptureLoop",
        )
        self.capture_thread.start()

    def run(self) -> Optional[CaptureCommand]:
        """
        Main application loop.

        Returns:
            The command that ended the capture loop (QUIT or LOGOUT), or
            None if stopped by a signal
        """
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

        self.start()
        self.logger.info("Starting Recorder App main loop...")

        try:
            while self.running:
                self.update()
                time.sleep(SERVICE_LOOP_INTERVAL)
        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        finally:
            self.shutdown()

        return self.exit_command

    def update(self) -> None:
        """One main loop iteration."""
        self._check_control_commands()

        if self.capture_thread is not None and not self.capture_thread.is_alive():
            self.running = False

    def send(self, command: CaptureCommand) -> None:
        """Forward a command to the capture loop (any thread)."""
        self.commands.put(command)

    def _capture_worker(self) -> None:
        try:
            self.exit_command = self.orchestrator.run()
        except Exception as e:
            self.logger.critical(f"Capture loop crashed: {e}", exc_info=True)

    # =========================================================================
    # REMOTE CONTROL
    # =========================================================================

    def _check_control_commands(self) -> None:
        """
        Check for and process remote control commands.

        The control file holds one keyword; it is deleted once read so a
        command is processed exactly once.
        """
        if not self.control_file.exists():
            return

        try:
            keyword = self.control_file.read_text().strip().upper()
            self.control_file.unlink()
        except OSError as e:
            self.logger.error(f"Failed to read control command: {e}")
            return

        self.logger.info(f"Remote command received: {keyword}")
        self._process_remote_command(keyword)

    def _process_remote_command(self, keyword: str) -> None:
        command = REMOTE_COMMANDS.get(keyword)
        if command is None:
            self.logger.warning(f"Unknown remote command: {keyword}")
            return

        self.send(command)

    # =========================================================================
    # SHUTDOWN HANDLING
    # =========================================================================

    def _signal_handler(self, signum, _frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            _frame: Current stack frame (unused, required by signal API)
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received signal {signal_name}, shutting down...")
        self.running = False

    def shutdown(self, upload_timeout: float = 30.0) -> None:
        """
        Graceful shutdown.

        Ends the capture loop, waits for an in-flight upload, stops the
        meeting poller, and logs out if LOGOUT ended the loop.
        """
        self.logger.info("Shutting down Recorder App...")
        self.running = False

        if self.capture_thread is not None and self.capture_thread.is_alive():
            self.send(CaptureCommand.QUIT)
            self.capture_thread.join(timeout=5.0)

        if self.orchestrator.is_uploading():
            self.logger.info("Waiting for upload to complete...")
            if not self.orchestrator.wait_for_upload(timeout=upload_timeout):
                self.logger.warning("Upload still running after timeout")

        self.meeting_poller.stop()

        if self.exit_command == CaptureCommand.LOGOUT:
            self.session_manager.logout()

        self.logger.info("Recorder App shutdown complete")


def setup_logging():
    """
    Setup logging with rotation.

    Logs to both console and file with rotation:
    - Daily rotation
    - Keep 7 days of logs
    """
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(message)s | %(name)s"))
    logger.addHandler(console_handler)

    file_format = logging.Formatter(
        "%(asctime)s %(levelname)s %(message)s | %(name)s",
    )

    log_file = Path(LOG_DIR) / LOG_SERVICE_FILE
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file),
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
    except OSError:
        # Fallback to local logs directory if LOG_DIR is not writable
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / LOG_SERVICE_FILE
        logger.warning(
            f"Cannot write to {log_file}, using fallback: {fallback_log}",
        )

        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(fallback_log),
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)


def main():
    """
    Main entry point.

    Sets up logging and runs the app.
    """
    setup_logging()

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("Desktop Recorder Starting")
    logger.info("=" * 60)

    try:
        app = RecorderApp()
        app.run()
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
