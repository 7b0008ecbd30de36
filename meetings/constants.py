"""
Meetings Constants

Timing values live in config/settings.py; this file only holds values
specific to interpreting meeting events.
"""

# Only meetings starting within this window count as "next meeting"
NEXT_MEETING_WINDOW_HOURS = 24

# Display format for meeting start times (local time)
MEETING_TIME_FORMAT = "%a %H:%M"
