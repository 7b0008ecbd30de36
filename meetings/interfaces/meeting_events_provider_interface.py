"""
Meeting Events Provider Interface

Abstract interface for calendar backends. Retrieval itself belongs to the
host application; the recorder only stores what the provider returns.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional


@dataclass(frozen=True)
class MeetingEvent:
    """
    One calendar entry.

    Attributes:
        event_id: Provider identifier
        summary: Meeting title
        start_time: RFC 3339 start instant
        meeting_url: Join link (may be empty)
        end_time: RFC 3339 end instant (may be empty)
    """

    event_id: str
    summary: str
    start_time: str
    meeting_url: str = ""
    end_time: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "MeetingEvent":
        return cls(
            event_id=str(data.get("id", "")),
            summary=str(data.get("event_summary", "")),
            start_time=str(data.get("meeting_start_time", "")),
            meeting_url=str(data.get("meeting_url", "") or ""),
            end_time=str(data.get("meeting_end_time", "") or ""),
        )

    def starts_at(self) -> Optional[datetime]:
        """Parsed start instant, or None if the provider sent garbage."""
        try:
            return datetime.fromisoformat(self.start_time.replace("Z", "+00:00"))
        except ValueError:
            return None


class MeetingEventsProviderInterface(ABC):
    """Source of upcoming meetings for the signed-in user."""

    @abstractmethod
    def fetch_events(self, access_token: str) -> List[MeetingEvent]:
        """
        Fetch upcoming meetings.

        Args:
            access_token: Current access token

        Returns:
            Meetings in provider order

        Raises:
            MeetingEventsError: If the provider could not be reached
        """


class MeetingEventsError(Exception):
    """Exception raised when meeting events cannot be fetched."""
    pass
