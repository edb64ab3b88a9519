"""Google Calendar / Google Tasks adapter: wire payloads <-> domain models."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from gcal_bridge.conference import parse_google_calendar_conference_data, to_google_calendar_conference_data
from gcal_bridge.config import Settings
from gcal_bridge.dates import (
    parse_google_date,
    parse_google_date_time,
    parse_google_task_date,
    to_google_calendar_date,
)
from gcal_bridge.errors import InvalidPayloadError, MissingFieldError
from gcal_bridge.google_models import (
    EventAttendee,
    EventDateTime,
    GoogleAttendeeResponseStatus,
    GoogleCalendarEvent,
    GoogleCalendarEventCreateParams,
    GoogleCalendarListEntry,
    GoogleModel,
    GoogleTask,
    GoogleTaskList,
    GoogleTaskUpdateParams,
)
from gcal_bridge.models import (
    Attendee,
    AttendeeStatus,
    AttendeeType,
    Calendar,
    CalendarEvent,
    EventInput,
    EventResponse,
    Task,
    TaskCollection,
    TaskInput,
    Temporal,
    UpdateEventInput,
    UpdateTaskInput,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

PROVIDER_ID = "google"
READ_ONLY_ACCESS_ROLES = frozenset({"reader", "freeBusyReader"})

_ATTENDEE_STATUSES: dict[str, AttendeeStatus] = {
    "accepted": "accepted",
    "tentative": "tentative",
    "declined": "declined",
}

M = TypeVar("M", bound=GoogleModel)


def validate_payload(model: type[M], data: M | Mapping[str, Any]) -> M:
    """Accept either a parsed model or a raw JSON dict."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidPayloadError(f"Invalid {model.__name__} payload: {e}") from e


# ---------------------------------------------------------------------------
# Attendees
# ---------------------------------------------------------------------------


def to_google_calendar_attendee_response_status(status: AttendeeStatus) -> GoogleAttendeeResponseStatus:
    if status == "unknown":
        return "needsAction"
    return status


def parse_google_calendar_attendee_status(status: GoogleAttendeeResponseStatus | str | None) -> AttendeeStatus:
    """needsAction, a missing status and any status Google adds later all read as unknown."""
    return _ATTENDEE_STATUSES.get(status or "", "unknown")


def parse_google_calendar_attendee_type(attendee: EventAttendee) -> AttendeeType:
    if attendee.resource:
        return "resource"
    if attendee.optional:
        return "optional"
    return "required"


def parse_google_calendar_attendee(attendee: EventAttendee | Mapping[str, Any]) -> Attendee:
    attendee = validate_payload(EventAttendee, attendee)
    return Attendee(
        id=attendee.id,
        email=attendee.email,
        name=attendee.displayName,
        status=parse_google_calendar_attendee_status(attendee.responseStatus),
        type=parse_google_calendar_attendee_type(attendee),
        comment=attendee.comment,
        additional_guests=attendee.additionalGuests,
    )


def to_google_calendar_attendee(attendee: Attendee) -> EventAttendee:
    return EventAttendee(
        id=attendee.id,
        email=attendee.email,
        displayName=attendee.name,
        responseStatus=to_google_calendar_attendee_response_status(attendee.status),
        optional=True if attendee.type == "optional" else None,
        resource=True if attendee.type == "resource" else None,
        comment=attendee.comment,
        additionalGuests=attendee.additional_guests,
    )


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


def _parse_event_time(value: EventDateTime | None, field: str, all_day: bool) -> Temporal:
    if value is None:
        raise InvalidPayloadError(f"Event {field} is missing")
    if all_day:
        if not value.date:
            raise InvalidPayloadError(f"All-day event {field} has no date")
        return parse_google_date(value.date)
    if not value.dateTime:
        raise InvalidPayloadError(f"Timed event {field} has no dateTime")
    return parse_google_date_time(value.dateTime, value.timeZone)


def _parse_response_status(event: GoogleCalendarEvent) -> EventResponse | None:
    self_attendee = next((a for a in event.attendees or [] if a.is_self), None)
    if self_attendee is None:
        return None
    return EventResponse(
        status=parse_google_calendar_attendee_status(self_attendee.responseStatus),
        comment=self_attendee.comment,
    )


def parse_google_calendar_event(
    calendar: Calendar,
    account_id: str,
    event: GoogleCalendarEvent | Mapping[str, Any],
) -> CalendarEvent:
    """Map a Google event resource to a CalendarEvent on *calendar*.

    An event whose ``start`` has no ``dateTime`` is all-day: both ends are
    plain dates. Timed events are zoned when Google reports a ``timeZone``,
    otherwise UTC instants.

    Raises:
        MissingFieldError: the event has no ``id`` or ``summary``.
        InvalidPayloadError: the payload does not match the event schema.
    """
    event = validate_payload(GoogleCalendarEvent, event)
    if not event.id:
        raise MissingFieldError("Event ID is missing", field="id")
    if event.summary is None:
        raise MissingFieldError(f"Event {event.id} has no summary", field="summary")

    all_day = event.start is None or not event.start.dateTime

    return CalendarEvent(
        id=event.id,
        title=event.summary,
        description=event.description,
        start=_parse_event_time(event.start, "start", all_day),
        end=_parse_event_time(event.end, "end", all_day),
        all_day=all_day,
        location=event.location,
        status=event.status,
        attendees=[parse_google_calendar_attendee(a) for a in event.attendees or []],
        url=event.htmlLink,
        provider_id=PROVIDER_ID,
        account_id=account_id,
        calendar_id=calendar.id,
        read_only=calendar.read_only,
        conference=parse_google_calendar_conference_data(event),
        response=_parse_response_status(event),
    )


def to_google_calendar_event(event: EventInput, settings: Settings | None = None) -> dict[str, Any]:
    """Request body for events.insert (create) or events.update (update).

    ``id`` is only sent for an UpdateEventInput. ``conferenceDataVersion`` is
    set whenever the body carries conference data.
    """
    settings = settings or Settings()
    conference_fields: dict[str, Any] = {}
    if event.conference is not None:
        if settings.conference_data_version == 0:
            logger.warning("conferenceDataVersion is 0: Google will ignore the conference on %r", event.title)
        conference_fields = {
            "conferenceData": to_google_calendar_conference_data(event.conference),
            "conferenceDataVersion": settings.conference_data_version,
        }
    return GoogleCalendarEventCreateParams(
        id=event.id if isinstance(event, UpdateEventInput) else None,
        summary=event.title,
        description=event.description,
        location=event.location,
        start=EventDateTime(**to_google_calendar_date(event.start)),
        end=EventDateTime(**to_google_calendar_date(event.end)),
        attendees=[to_google_calendar_attendee(a) for a in event.attendees] if event.attendees is not None else None,
        **conference_fields,
    ).to_payload()


# ---------------------------------------------------------------------------
# Calendars
# ---------------------------------------------------------------------------


def parse_google_calendar_calendar_list_entry(
    account_id: str,
    entry: GoogleCalendarListEntry | Mapping[str, Any],
) -> Calendar:
    """Map a calendarList entry to a Calendar; reader roles make it read-only."""
    entry = validate_payload(GoogleCalendarListEntry, entry)
    if not entry.id:
        raise MissingFieldError("Calendar ID is missing", field="id")
    name = entry.summaryOverride if entry.summaryOverride is not None else entry.summary
    if name is None:
        raise MissingFieldError(f"Calendar {entry.id} has no summary", field="summary")

    return Calendar(
        id=entry.id,
        provider_id=PROVIDER_ID,
        name=name,
        description=entry.description,
        time_zone=entry.timeZone,
        primary=bool(entry.primary),
        account_id=account_id,
        color=entry.backgroundColor,
        read_only=entry.accessRole in READ_ONLY_ACCESS_ROLES,
    )


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


def parse_google_task(
    task: GoogleTask | Mapping[str, Any],
    collection_id: str,
    account_id: str,
) -> Task:
    task = validate_payload(GoogleTask, task)
    if not task.id:
        raise MissingFieldError("Task ID is missing", field="id")
    return Task(
        id=task.id,
        title=task.title or "",
        completed=parse_google_task_date(task.completed) if task.completed else None,
        description=task.notes,
        due=parse_google_task_date(task.due) if task.due else None,
        provider_id=PROVIDER_ID,
        account_id=account_id,
        task_collection_id=collection_id,
    )


def to_google_task(task: TaskInput) -> dict[str, Any]:
    """Request body for tasks.insert / tasks.update; ``tasklist`` names the target list."""
    return GoogleTaskUpdateParams(
        id=task.id if isinstance(task, UpdateTaskInput) else None,
        title=task.title,
        notes=task.description,
        due=task.due.isoformat() if task.due else None,
        status="completed" if task.completed else "needsAction",
        completed=task.completed.isoformat() if task.completed else None,
        tasklist=task.task_collection_id,
    ).to_payload()


def parse_google_task_list(task_list: GoogleTaskList | Mapping[str, Any], account_id: str) -> TaskCollection:
    task_list = validate_payload(GoogleTaskList, task_list)
    if not task_list.id:
        raise MissingFieldError("Task list ID is missing", field="id")
    return TaskCollection(
        id=task_list.id,
        title=task_list.title or "",
        provider_id=PROVIDER_ID,
        account_id=account_id,
    )
