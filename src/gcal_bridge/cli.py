"""CLI entry point for gcal-bridge (gcb): map Google Calendar JSON to domain objects and back."""

from __future__ import annotations

import functools
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from gcal_bridge.config import Settings
    from gcal_bridge.models import Calendar

import click
from pydantic import ValidationError

from gcal_bridge.config import OUTPUT_FORMATS, load_settings
from gcal_bridge.errors import BridgeError, InvalidPayloadError, output_error
from gcal_bridge.output import render

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def output_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Shared decorator that adds --format and --json to a command."""

    @click.option("--format", "fmt", type=click.Choice(OUTPUT_FORMATS), default=None, help="Output format.")
    @click.option("--json", "json_flag", is_flag=True, help="Shortcut for --format json.")
    @functools.wraps(f)
    def wrapper(*args: Any, fmt: str | None, json_flag: bool, **kwargs: Any) -> Any:
        if json_flag:
            fmt = "json"
        kwargs["fmt"] = fmt
        return f(*args, **kwargs)

    return wrapper


def _get_settings() -> Settings:
    """Load settings and configure logging on stderr."""
    settings = load_settings()
    ctx = click.get_current_context(silent=True)
    verbose = bool(ctx and ctx.obj and ctx.obj.get("verbose"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return settings


def _read_items(stream: Any) -> tuple[list[Any], bool]:
    """Load a JSON document: single object, list, or Google list response ({"items": [...]}).

    Returns the items and whether the document held more than one object.
    """
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise InvalidPayloadError(f"Input is not valid JSON: {e}") from e
    if isinstance(data, list):
        return data, True
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return data["items"], True
    return [data], False


def _emit(
    results: list[dict[str, Any]],
    many: bool,
    fmt: str | None,
    settings: Settings,
    columns: list[str] | None = None,
) -> None:
    data: Any = results if many else results[0]
    click.echo(render(data, fmt=fmt or settings.output_format, columns=columns))


def _validation_error(e: ValidationError) -> None:
    output_error("invalid_input", str(e), ["Check field names (camelCase) and date formats"])


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging on stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """gcal-bridge (gcb): convert Google Calendar / Tasks JSON to provider-agnostic objects."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# events
# ---------------------------------------------------------------------------

EVENT_COLUMNS = ["id", "title", "start", "end", "allDay", "status", "calendarId"]


@cli.group()
def events() -> None:
    """Map calendar events."""


def _resolve_calendar(
    calendar_entry: Any | None,
    calendar_id: str | None,
    read_only: bool,
    account_id: str,
) -> Calendar:
    from gcal_bridge.google import PROVIDER_ID, parse_google_calendar_calendar_list_entry
    from gcal_bridge.models import Calendar

    if calendar_entry is not None:
        items, _ = _read_items(calendar_entry)
        if not items:
            raise InvalidPayloadError(
                "Calendar entry file holds no calendarList entry",
                suggestions=["Pass a single calendarList entry, or a list response with at least one item"],
            )
        return parse_google_calendar_calendar_list_entry(account_id, items[0])
    if calendar_id is None:
        raise BridgeError(
            "No calendar given",
            suggestions=["Pass --calendar-entry with a calendarList entry", "Or pass --calendar-id"],
        )
    return Calendar(id=calendar_id, provider_id=PROVIDER_ID, name=calendar_id, account_id=account_id, read_only=read_only)


@events.command("parse")
@click.argument("source", type=click.File("r"))
@click.option("--calendar-entry", type=click.File("r"), default=None, help="calendarList entry JSON for the events.")
@click.option("--calendar-id", default=None, help="Calendar ID (when no --calendar-entry is given).")
@click.option("--read-only", is_flag=True, default=False, help="Mark events read-only (with --calendar-id).")
@click.option("--account-id", default=None, help="Account ID (defaults to the configured account).")
@output_options
def events_parse(
    source: Any,
    calendar_entry: Any | None,
    calendar_id: str | None,
    read_only: bool,
    account_id: str | None,
    fmt: str | None,
) -> None:
    """Map Google event JSON (SOURCE, '-' for stdin) to calendar events."""
    from gcal_bridge.google import parse_google_calendar_event

    try:
        settings = _get_settings()
        account = account_id or settings.account_id
        calendar = _resolve_calendar(calendar_entry, calendar_id, read_only, account)
        items, many = _read_items(source)
        results = [parse_google_calendar_event(calendar, account, item).to_json_dict() for item in items]
        _emit(results, many, fmt, settings, columns=EVENT_COLUMNS)
    except BridgeError as e:
        output_error(e.error_type, str(e), e.suggestions)


@events.command("build")
@click.argument("source", type=click.File("r"))
def events_build(source: Any) -> None:
    """Map create/update event input JSON (SOURCE) to Google request bodies.

    An input with an "id" is an update.
    """
    from gcal_bridge.google import to_google_calendar_event
    from gcal_bridge.models import CreateEventInput, UpdateEventInput

    try:
        settings = _get_settings()
        items, many = _read_items(source)
        results = []
        for item in items:
            model = UpdateEventInput if isinstance(item, dict) and "id" in item else CreateEventInput
            results.append(to_google_calendar_event(model.model_validate(item), settings))
        _emit(results, many, "json", settings)
    except ValidationError as e:
        _validation_error(e)
    except BridgeError as e:
        output_error(e.error_type, str(e), e.suggestions)


@cli.command()
@click.argument("source", type=click.File("r"))
@output_options
def conference(source: Any, fmt: str | None) -> None:
    """Show the conference found in each Google event (structured data or a link scan)."""
    from gcal_bridge.conference import parse_google_calendar_conference_data
    from gcal_bridge.google import validate_payload
    from gcal_bridge.google_models import GoogleCalendarEvent

    try:
        settings = _get_settings()
        items, many = _read_items(source)
        results: list[dict[str, Any]] = []
        for item in items:
            event = validate_payload(GoogleCalendarEvent, item)
            found = parse_google_calendar_conference_data(event)
            results.append({"eventId": event.id, "conference": found.to_json_dict() if found else None})
        _emit(results, many, fmt, settings)
    except BridgeError as e:
        output_error(e.error_type, str(e), e.suggestions)


@cli.command()
@click.argument("url")
def detect(url: str) -> None:
    """Identify the conferencing service of URL."""
    from gcal_bridge.meeting_links import detect_meeting_link

    link = detect_meeting_link(url)
    if link is None:
        output_error(
            "not_a_meeting_link",
            f"No known conferencing service for {url}",
            ["Supported: Google Meet, Zoom, Microsoft Teams, Webex, GoTo Meeting, and others"],
        )
        return
    click.echo(render({"id": link.id, "name": link.name, "joinUrl": link.join_url, "meetingCode": link.meeting_code}))


# ---------------------------------------------------------------------------
# calendars
# ---------------------------------------------------------------------------

CALENDAR_COLUMNS = ["id", "name", "primary", "readOnly", "timeZone", "color"]


@cli.group()
def calendars() -> None:
    """Map calendar list entries."""


@calendars.command("parse")
@click.argument("source", type=click.File("r"))
@click.option("--account-id", default=None, help="Account ID (defaults to the configured account).")
@output_options
def calendars_parse(source: Any, account_id: str | None, fmt: str | None) -> None:
    """Map Google calendarList JSON (SOURCE) to calendars."""
    from gcal_bridge.google import parse_google_calendar_calendar_list_entry

    try:
        settings = _get_settings()
        account = account_id or settings.account_id
        items, many = _read_items(source)
        results = [parse_google_calendar_calendar_list_entry(account, item).to_json_dict() for item in items]
        _emit(results, many, fmt, settings, columns=CALENDAR_COLUMNS)
    except BridgeError as e:
        output_error(e.error_type, str(e), e.suggestions)


# ---------------------------------------------------------------------------
# tasks
# ---------------------------------------------------------------------------

TASK_COLUMNS = ["id", "title", "due", "completed", "taskCollectionId"]


@cli.group()
def tasks() -> None:
    """Map tasks."""


@tasks.command("parse")
@click.argument("source", type=click.File("r"))
@click.option("--collection-id", required=True, help="Task list the tasks belong to.")
@click.option("--account-id", default=None, help="Account ID (defaults to the configured account).")
@output_options
def tasks_parse(source: Any, collection_id: str, account_id: str | None, fmt: str | None) -> None:
    """Map Google task JSON (SOURCE) to tasks."""
    from gcal_bridge.google import parse_google_task

    try:
        settings = _get_settings()
        account = account_id or settings.account_id
        items, many = _read_items(source)
        results = [parse_google_task(item, collection_id, account).to_json_dict() for item in items]
        _emit(results, many, fmt, settings, columns=TASK_COLUMNS)
    except BridgeError as e:
        output_error(e.error_type, str(e), e.suggestions)


@tasks.command("build")
@click.argument("source", type=click.File("r"))
def tasks_build(source: Any) -> None:
    """Map create/update task input JSON (SOURCE) to Google request bodies."""
    from gcal_bridge.google import to_google_task
    from gcal_bridge.models import CreateTaskInput, UpdateTaskInput

    try:
        settings = _get_settings()
        items, many = _read_items(source)
        results = []
        for item in items:
            model = UpdateTaskInput if isinstance(item, dict) and "id" in item else CreateTaskInput
            results.append(to_google_task(model.model_validate(item)))
        _emit(results, many, "json", settings)
    except ValidationError as e:
        _validation_error(e)
    except BridgeError as e:
        output_error(e.error_type, str(e), e.suggestions)


@cli.group()
def tasklists() -> None:
    """Map task lists."""


@tasklists.command("parse")
@click.argument("source", type=click.File("r"))
@click.option("--account-id", default=None, help="Account ID (defaults to the configured account).")
@output_options
def tasklists_parse(source: Any, account_id: str | None, fmt: str | None) -> None:
    """Map Google tasklist JSON (SOURCE) to task collections."""
    from gcal_bridge.google import parse_google_task_list

    try:
        settings = _get_settings()
        account = account_id or settings.account_id
        items, many = _read_items(source)
        results = [parse_google_task_list(item, account).to_json_dict() for item in items]
        _emit(results, many, fmt, settings)
    except BridgeError as e:
        output_error(e.error_type, str(e), e.suggestions)
