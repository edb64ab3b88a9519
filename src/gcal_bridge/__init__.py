"""gcal-bridge: Google Calendar / Google Tasks payloads <-> provider-agnostic domain models."""

from __future__ import annotations

from gcal_bridge.google import (
    parse_google_calendar_attendee,
    parse_google_calendar_calendar_list_entry,
    parse_google_calendar_event,
    parse_google_task,
    parse_google_task_list,
    to_google_calendar_attendee_response_status,
    to_google_calendar_event,
    to_google_task,
)
from gcal_bridge.meeting_links import MeetingLink, detect_meeting_link

__version__ = "0.1.0"

__all__ = [
    "MeetingLink",
    "detect_meeting_link",
    "parse_google_calendar_attendee",
    "parse_google_calendar_calendar_list_entry",
    "parse_google_calendar_event",
    "parse_google_task",
    "parse_google_task_list",
    "to_google_calendar_attendee_response_status",
    "to_google_calendar_event",
    "to_google_task",
]
