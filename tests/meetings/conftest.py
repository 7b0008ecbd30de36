"""
Meetings Test Configuration and Fixtures
"""

import pytest

from meetings.implementations.mock_meeting_provider import MockMeetingProvider
from meetings.interfaces.meeting_events_provider_interface import MeetingEvent


@pytest.fixture
def standup():
    return MeetingEvent(
        event_id="evt-1",
        summary="Daily standup",
        start_time="2025-10-12T09:00:00Z",
        meeting_url="https://meet.test/standup",
    )


@pytest.fixture
def provider(standup):
    """Provide MockMeetingProvider serving one event."""
    return MockMeetingProvider([standup])
