"""
Meetings Controllers Package
"""

from meetings.controllers.meeting_events_poller import MeetingEventsPoller

__all__ = ["MeetingEventsPoller"]
