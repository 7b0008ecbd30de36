"""
Meetings Module

Periodic fetch of upcoming meetings into shared state.

Public API:
    - MeetingEventsPoller: Background fetch task
    - MeetingEvent: Calendar entry
    - MeetingEventsProviderInterface: Calendar backend contract
    - next_meeting: Next meeting within the lookahead window
"""

from meetings.controllers.meeting_events_poller import MeetingEventsPoller
from meetings.implementations.mock_meeting_provider import MockMeetingProvider
from meetings.interfaces.meeting_events_provider_interface import (
    MeetingEvent,
    MeetingEventsError,
    MeetingEventsProviderInterface,
)
from meetings.utils.meeting_utils import format_start_time, next_meeting

# Public API
__all__ = [
    "MeetingEvent",
    "MeetingEventsError",
    "MeetingEventsPoller",
    "MeetingEventsProviderInterface",
    "MockMeetingProvider",
    "format_start_time",
    "next_meeting",
]
