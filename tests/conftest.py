"""Shared test fixtures."""

from __future__ import annotations

import copy
from typing import Any

import pytest
from click.testing import CliRunner

from gcal_bridge.models import Calendar

# ---------------------------------------------------------------------------
# Fake Google payloads
# ---------------------------------------------------------------------------

FAKE_CALENDAR_LIST_ENTRY: dict[str, Any] = {
    "kind": "calendar#calendarListEntry",
    "id": "work@example.com",
    "summary": "Work",
    "description": "Team calendar",
    "timeZone": "Europe/Paris",
    "backgroundColor": "#4285f4",
    "foregroundColor": "#000000",
    "accessRole": "owner",
    "primary": True,
}

FAKE_TIMED_EVENT: dict[str, Any] = {
    "kind": "calendar#event",
    "id": "evt-1",
    "status": "confirmed",
    "htmlLink": "https://www.google.com/calendar/event?eid=evt-1",
    "summary": "Standup",
    "description": "Daily sync",
    "location": "Room 42",
    "start": {"dateTime": "2026-02-17T09:00:00+01:00", "timeZone": "Europe/Paris"},
    "end": {"dateTime": "2026-02-17T09:15:00+01:00", "timeZone": "Europe/Paris"},
    "attendees": [
        {"email": "me@example.com", "self": True, "responseStatus": "tentative", "comment": "maybe late"},
        {"email": "alice@example.com", "displayName": "Alice", "responseStatus": "accepted", "organizer": True},
        {"email": "bob@example.com", "responseStatus": "needsAction", "optional": True},
        {"email": "room-42@resource.calendar.google.com", "resource": True, "optional": True},
    ],
    "conferenceData": {
        "conferenceId": "abc-defg-hij",
        "conferenceSolution": {"key": {"type": "hangoutsMeet"}, "name": "Google Meet"},
        "entryPoints": [
            {
                "entryPointType": "video",
                "uri": "https://meet.google.com/abc-defg-hij",
                "label": "meet.google.com/abc-defg-hij",
            },
            {
                "entryPointType": "phone",
                "uri": "tel:+1-555-123-4567",
                "label": "+1 555-123-4567",
                "pin": "123456789",
            },
            {"entryPointType": "more", "uri": "https://tel.meet/abc-defg-hij?pin=123"},
        ],
    },
}

FAKE_ALL_DAY_EVENT: dict[str, Any] = {
    "id": "evt-2",
    "summary": "Offsite",
    "start": {"date": "2026-03-02"},
    "end": {"date": "2026-03-04"},
}

FAKE_TASK: dict[str, Any] = {
    "kind": "tasks#task",
    "id": "task-1",
    "title": "Write report",
    "notes": "Q1 numbers",
    "status": "needsAction",
    "due": "2026-02-20T00:00:00.000Z",
}

FAKE_TASK_LIST: dict[str, Any] = {
    "kind": "tasks#taskList",
    "id": "list-1",
    "title": "My Tasks",
    "updated": "2026-02-17T10:00:00.000Z",
}


@pytest.fixture
def calendar() -> Calendar:
    return Calendar(id="work@example.com", provider_id="google", name="Work", account_id="acc-1", primary=True)


@pytest.fixture
def read_only_calendar() -> Calendar:
    return Calendar(id="holidays", provider_id="google", name="Holidays", account_id="acc-1", read_only=True)


@pytest.fixture
def timed_event() -> dict[str, Any]:
    return copy.deepcopy(FAKE_TIMED_EVENT)


@pytest.fixture
def all_day_event() -> dict[str, Any]:
    return copy.deepcopy(FAKE_ALL_DAY_EVENT)


@pytest.fixture
def runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own config and GCB_* env vars out of tests."""
    for key in ("GCB_CONFIG", "GCB_ACCOUNT_ID", "GCB_CONFERENCE_DATA_VERSION", "GCB_OUTPUT_FORMAT", "GCB_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
