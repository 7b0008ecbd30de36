"""
Meeting Utilities Package
"""

from meetings.utils.meeting_utils import format_start_time, next_meeting

__all__ = ["format_start_time", "next_meeting"]
