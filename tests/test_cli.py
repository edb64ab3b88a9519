"""Tests for the gcb command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner, Result

from gcal_bridge.cli import cli
from tests.conftest import FAKE_ALL_DAY_EVENT, FAKE_CALENDAR_LIST_ENTRY, FAKE_TASK, FAKE_TASK_LIST, FAKE_TIMED_EVENT


def _write(tmp_path: Path, name: str, data: Any) -> str:
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


def _assert_structured_error(result: Result, error_type: str) -> dict[str, Any]:
    assert result.exit_code == 1
    err: dict[str, Any] = json.loads(result.output)
    assert err["error"]["type"] == error_type
    assert "message" in err["error"]
    return err


class TestEventsParse:
    def test_single_event(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "event.json", FAKE_TIMED_EVENT)
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-id", "work", "--account-id", "acc-1", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["id"] == "evt-1"
        assert data["calendarId"] == "work"
        assert data["accountId"] == "acc-1"
        assert data["conference"]["id"] == "google-meet"

    def test_list_response(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "events.json", {"kind": "calendar#events", "items": [FAKE_TIMED_EVENT, FAKE_ALL_DAY_EVENT]})
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-id", "work"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [e["id"] for e in data] == ["evt-1", "evt-2"]
        assert data[1]["allDay"] is True
        assert data[1]["start"] == "2026-03-02"

    def test_calendar_entry(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "event.json", FAKE_ALL_DAY_EVENT)
        cal = _write(tmp_path, "calendar.json", {**FAKE_CALENDAR_LIST_ENTRY, "accessRole": "reader"})
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-entry", cal])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["calendarId"] == "work@example.com"
        assert data["readOnly"] is True

    @pytest.mark.parametrize("entries", [[], {"kind": "calendar#calendarList", "items": []}])
    def test_empty_calendar_entry(self, runner: CliRunner, tmp_path: Path, entries: Any) -> None:
        src = _write(tmp_path, "event.json", FAKE_ALL_DAY_EVENT)
        cal = _write(tmp_path, "calendar.json", entries)
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-entry", cal])
        err = _assert_structured_error(result, "invalid_payload")
        assert "no calendarList entry" in err["error"]["message"]

    def test_read_only_flag(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "event.json", FAKE_ALL_DAY_EVENT)
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-id", "work", "--read-only"])
        assert json.loads(result.output)["readOnly"] is True

    def test_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["events", "parse", "-", "--calendar-id", "work"], input=json.dumps(FAKE_ALL_DAY_EVENT)
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["id"] == "evt-2"

    def test_default_account_from_env(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GCB_ACCOUNT_ID", "env-account")
        src = _write(tmp_path, "event.json", FAKE_ALL_DAY_EVENT)
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-id", "work"])
        assert json.loads(result.output)["accountId"] == "env-account"

    def test_table_output(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "event.json", FAKE_ALL_DAY_EVENT)
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-id", "work", "--format", "table"])
        assert result.exit_code == 0, result.output
        assert "Offsite" in result.output

    def test_no_calendar(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "event.json", FAKE_ALL_DAY_EVENT)
        result = runner.invoke(cli, ["events", "parse", src])
        err = _assert_structured_error(result, "bridge_error")
        assert err["error"]["suggestions"]

    def test_missing_id(self, runner: CliRunner, tmp_path: Path) -> None:
        event = {k: v for k, v in FAKE_ALL_DAY_EVENT.items() if k != "id"}
        src = _write(tmp_path, "event.json", event)
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-id", "work"])
        _assert_structured_error(result, "missing_field")

    def test_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        src = tmp_path / "broken.json"
        src.write_text("{not json")
        result = runner.invoke(cli, ["events", "parse", str(src), "--calendar-id", "work"])
        _assert_structured_error(result, "invalid_payload")

    def test_bad_config(self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GCB_OUTPUT_FORMAT", "xml")
        src = _write(tmp_path, "event.json", FAKE_ALL_DAY_EVENT)
        result = runner.invoke(cli, ["events", "parse", src, "--calendar-id", "work"])
        _assert_structured_error(result, "config_error")


class TestEventsBuild:
    def test_create(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(
            tmp_path,
            "new.json",
            {
                "title": "Call",
                "start": "2026-02-17T09:00:00+01:00[Europe/Paris]",
                "end": "2026-02-17T10:00:00+01:00[Europe/Paris]",
                "conference": {"phone": [{"joinUrl": {"value": "15551234567"}}]},
            },
        )
        result = runner.invoke(cli, ["events", "build", src])
        assert result.exit_code == 0, result.output
        body = json.loads(result.output)
        assert "id" not in body
        assert body["summary"] == "Call"
        assert body["conferenceDataVersion"] == 1
        assert body["conferenceData"]["entryPoints"][0]["uri"] == "tel:15551234567"

    def test_update(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "upd.json", {"id": "evt-1", "title": "Call", "start": "2026-03-02", "end": "2026-03-03"})
        result = runner.invoke(cli, ["events", "build", src])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["id"] == "evt-1"

    def test_missing_title(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "bad.json", {"start": "2026-03-02", "end": "2026-03-03"})
        result = runner.invoke(cli, ["events", "build", src])
        _assert_structured_error(result, "invalid_input")

    def test_naive_datetime(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "bad.json", {"title": "x", "start": "2026-03-02T09:00:00", "end": "2026-03-02"})
        result = runner.invoke(cli, ["events", "build", src])
        _assert_structured_error(result, "invalid_input")


class TestConference:
    def test_conference_per_event(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "events.json", [FAKE_TIMED_EVENT, FAKE_ALL_DAY_EVENT])
        result = runner.invoke(cli, ["conference", src])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0]["eventId"] == "evt-1"
        assert data[0]["conference"]["conferenceId"] == "abc-defg-hij"
        assert data[1]["conference"] is None


class TestDetect:
    def test_known(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["detect", "https://zoom.us/j/123456"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "id": "zoom",
            "name": "Zoom",
            "joinUrl": "https://zoom.us/j/123456",
            "meetingCode": "123456",
        }

    def test_unknown(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["detect", "https://example.com"])
        _assert_structured_error(result, "not_a_meeting_link")


class TestCalendarsParse:
    def test_json(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "cals.json", {"items": [FAKE_CALENDAR_LIST_ENTRY]})
        result = runner.invoke(cli, ["calendars", "parse", src, "--account-id", "acc-1"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0]["name"] == "Work"
        assert data[0]["primary"] is True

    def test_table(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "cals.json", [FAKE_CALENDAR_LIST_ENTRY])
        result = runner.invoke(cli, ["calendars", "parse", src, "--format", "table"])
        assert result.exit_code == 0, result.output
        assert "Work" in result.output

    def test_missing_id(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "cal.json", {"summary": "No id"})
        result = runner.invoke(cli, ["calendars", "parse", src])
        err = _assert_structured_error(result, "missing_field")
        assert err["error"]["message"] == "Calendar ID is missing"


class TestTasks:
    def test_parse(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "tasks.json", {"items": [FAKE_TASK]})
        result = runner.invoke(cli, ["tasks", "parse", src, "--collection-id", "list-1"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0]["due"] == "2026-02-20"
        assert data[0]["taskCollectionId"] == "list-1"

    def test_parse_requires_collection(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "tasks.json", FAKE_TASK)
        result = runner.invoke(cli, ["tasks", "parse", src])
        assert result.exit_code == 2

    def test_build(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "task.json", {"id": "task-1", "title": "Done", "completed": "2026-02-18", "taskCollectionId": "list-1"})
        result = runner.invoke(cli, ["tasks", "build", src])
        assert result.exit_code == 0, result.output
        body = json.loads(result.output)
        assert body["id"] == "task-1"
        assert body["status"] == "completed"

    def test_tasklists(self, runner: CliRunner, tmp_path: Path) -> None:
        src = _write(tmp_path, "lists.json", {"items": [FAKE_TASK_LIST]})
        result = runner.invoke(cli, ["tasklists", "parse", src, "--account-id", "acc-1"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {"id": "list-1", "title": "My Tasks", "providerId": "google", "accountId": "acc-1"}
        ]
