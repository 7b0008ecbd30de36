"""
Meetings Interfaces Package
"""

from meetings.interfaces.meeting_events_provider_interface import (
    MeetingEvent,
    MeetingEventsError,
    MeetingEventsProviderInterface,
)

__all__ = [
    "MeetingEvent",
    "MeetingEventsError",
    "MeetingEventsProviderInterface",
]
