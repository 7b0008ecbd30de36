"""
Device Authorization

Drives one device authorization attempt to completion.

State Flow:
    REQUESTING -> WAITING(interval) -> POLLING -> WAITING        (pending)
                                               -> WAITING(+5s)   (slow_down)
                                               -> SUCCESS
                                               -> FATAL

Rules:
- The session expiry is checked before every sleep; once reached the attempt
  fails with ExpiredTokenError. This is the loop's only timeout.
- The loop waits one full interval before each poll. The interval is a
  floor set by the server, not a schedule.
- "slow_down" adds SLOW_DOWN_INCREMENT_SECONDS to the interval for the rest
  of the session; it is never decreased.
"""

import logging
import time
from typing import Callable, List, Optional

from auth.constants import DeviceFlowState, PollOutcome
from auth.device_flow_client import DeviceFlowClient
from auth.errors import AuthError, ExpiredTokenError
from auth.models import Credential, DeviceSession
from config.settings import SLOW_DOWN_INCREMENT_SECONDS


class DeviceAuthorization:
    """
    Polling state machine for the device flow.

    Usage:
        flow = DeviceAuthorization(client)
        flow.on_device_session = lambda s: print(s.user_code)
        credential = flow.run()  # Blocks until granted, denied or expired
    """

    def __init__(
        self,
        client: DeviceFlowClient,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the runner.

        Args:
            client: Device flow HTTP client
            sleep: Wait function (tests record waits instead of sleeping)
            clock: Time source used for the session expiry check
        """
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.sleep = sleep
        self.clock = clock

        self.state = DeviceFlowState.REQUESTING
        self.session: Optional[DeviceSession] = None
        self.waits: List[float] = []

        # Called once the user code is known, so the UI can display it
        self.on_device_session: Optional[Callable[[DeviceSession], None]] = None

    def run(self) -> Credential:
        """
        Run the full device flow.

        Returns:
            Newly issued credential

        Raises:
            ExpiredTokenError: Session expired before authorization
            AuthError: Any other fatal error (denied, network, unknown)
        """
        self._transition(DeviceFlowState.REQUESTING)
        try:
            self.session = self.client.request_device_code()
        except AuthError:
            self._transition(DeviceFlowState.FATAL)
            raise

        self.logger.info(
            f"🔐 Please authenticate: {self.session.display_uri} "
            f"(code: {self.session.user_code})",
        )
        self._trigger_device_session_callback(self.session)

        while True:
            if self.session.is_expired(now=self.clock()):
                self._transition(DeviceFlowState.FATAL, "device code expired")
                raise ExpiredTokenError()

            self._transition(DeviceFlowState.WAITING)
            self.waits.append(self.session.interval)
            self.sleep(self.session.interval)

            self._transition(DeviceFlowState.POLLING)
            try:
                result = self.client.poll_token(self.session.device_code)
            except AuthError as e:
                self._transition(DeviceFlowState.FATAL, str(e))
                raise

            if result.outcome == PollOutcome.SUCCESS:
                self._transition(DeviceFlowState.SUCCESS)
                return result.credential

            if result.outcome == PollOutcome.SLOW_DOWN:
                self.session.interval += SLOW_DOWN_INCREMENT_SECONDS
                self.logger.info(
                    f"Server asked to slow down, polling every "
                    f"{self.session.interval:.0f}s",
                )
            # PENDING: keep the interval, wait again

    def _transition(self, new_state: DeviceFlowState, reason: str = "") -> None:
        if new_state == self.state:
            return

        log_msg = f"Device flow: {self.state.value} -> {new_state.value}"
        if reason:
            log_msg += f" ({reason})"
        self.logger.debug(log_msg)
        self.state = new_state

    def _trigger_device_session_callback(self, session: DeviceSession) -> None:
        """Trigger on_device_session callback"""
        if self.on_device_session:
            try:
                self.on_device_session(session)
            except Exception as e:
                self.logger.error(f"Error in device session callback: {e}")
