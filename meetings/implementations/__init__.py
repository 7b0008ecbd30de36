"""
Meetings Implementations Package
"""

from meetings.implementations.mock_meeting_provider import MockMeetingProvider

__all__ = ["MockMeetingProvider"]
