"""
Meeting Utilities
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from meetings.constants import MEETING_TIME_FORMAT, NEXT_MEETING_WINDOW_HOURS
from meetings.interfaces.meeting_events_provider_interface import MeetingEvent


def next_meeting(
    events: Iterable[MeetingEvent],
    now: Optional[datetime] = None,
    window_hours: float = NEXT_MEETING_WINDOW_HOURS,
) -> Optional[MeetingEvent]:
    """
    First event (in provider order) starting within the next window.

    Events with unparseable start times are ignored.
    """
    now = now or datetime.now(timezone.utc)
    horizon = now + timedelta(hours=window_hours)

    for event in events:
        starts_at = event.starts_at()
        if starts_at is None or starts_at.tzinfo is None:
            continue
        if now < starts_at < horizon:
            return event
    return None


def format_start_time(event: MeetingEvent) -> str:
    """Local start time for display, or the raw string if unparseable."""
    starts_at = event.starts_at()
    if starts_at is None:
        return event.start_time
    return starts_at.astimezone().strftime(MEETING_TIME_FORMAT)
