"""
Meeting Events Poller

Background task keeping SharedState.meeting_events current.

Schedule:
    wait MEETING_EVENTS_INITIAL_DELAY -> fetch
    then every MEETING_EVENTS_REFRESH_INTERVAL -> fetch

A fetch is skipped while no credential is available. Fetch failures are
logged and the previous events are kept.
"""

import logging
import threading
from typing import Optional

from config.settings import (
    MEETING_EVENTS_INITIAL_DELAY,
    MEETING_EVENTS_REFRESH_INTERVAL,
)
from core.shared_state import SharedState
from meetings.interfaces.meeting_events_provider_interface import (
    MeetingEventsError,
    MeetingEventsProviderInterface,
)
from meetings.utils.meeting_utils import format_start_time, next_meeting


class MeetingEventsPoller:
    """
    Periodic calendar fetch on a daemon thread.

    Usage:
        poller = MeetingEventsPoller(provider, shared_state)
        poller.start()
        ...
        poller.stop()
    """

    def __init__(
        self,
        provider: MeetingEventsProviderInterface,
        shared_state: SharedState,
        initial_delay: float = MEETING_EVENTS_INITIAL_DELAY,
        interval: float = MEETING_EVENTS_REFRESH_INTERVAL,
    ):
        self.logger = logging.getLogger(__name__)
        self.provider = provider
        self.shared_state = shared_state
        self.initial_delay = initial_delay
        self.interval = interval

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start the polling thread (no-op if already running)."""
        if self._thread is not None and self._thread.is_alive():
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_worker,
            daemon=True,
            name="MeetingEventsPoller",
        )
        self._thread.start()
        self.logger.info("Meeting events poller started")

    def stop(self, timeout: float = 2.0) -> None:
        """Signal the thread to stop and wait for it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def refresh(self) -> bool:
        """
        Fetch events once and store them.

        Also called directly when the user opens the calendar view.

        Returns:
            True if events were stored
        """
        credential = self.shared_state.credential.get()
        if credential is None:
            self.logger.debug("No credential yet, skipping meeting events fetch")
            return False

        try:
            events = self.provider.fetch_events(credential.access_token)
        except MeetingEventsError as e:
            self.logger.warning(f"Failed to fetch meeting events: {e}")
            return False

        self.shared_state.meeting_events.set(events)
        self.logger.info(f"📅 Loaded {len(events)} meeting events")

        upcoming = next_meeting(events)
        if upcoming is not None:
            self.logger.info(
                f"⏰ Next meeting: {upcoming.summary} at {format_start_time(upcoming)}",
            )
        return True

    def _poll_worker(self) -> None:
        if self._stop_event.wait(self.initial_delay):
            return

        while True:
            self.refresh()
            if self._stop_event.wait(self.interval):
                return
