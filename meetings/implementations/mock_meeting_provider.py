"""
Mock Meeting Events Provider

Serves a fixed list of events. Used in tests and when the host application
supplies no calendar backend.
"""

import logging
from typing import List, Optional

from meetings.interfaces.meeting_events_provider_interface import (
    MeetingEvent,
    MeetingEventsError,
    MeetingEventsProviderInterface,
)


class MockMeetingProvider(MeetingEventsProviderInterface):
    """
    Mock calendar backend.

    Usage:
        provider = MockMeetingProvider([event])
        provider.should_fail = True  # next fetches raise MeetingEventsError
    """

    def __init__(self, events: Optional[List[MeetingEvent]] = None):
        self.logger = logging.getLogger(__name__)
        self.events: List[MeetingEvent] = list(events or [])
        self.should_fail = False

        # Tokens passed to fetch_events, for assertions
        self.fetch_tokens: List[str] = []

    def fetch_events(self, access_token: str) -> List[MeetingEvent]:
        self.fetch_tokens.append(access_token)
        if self.should_fail:
            raise MeetingEventsError("Simulated calendar failure")

        self.logger.debug(f"[MOCK] Returning {len(self.events)} meeting events")
        return list(self.events)
