"""Provider-agnostic domain models for calendars, events, conferences and tasks."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Literal, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from gcal_bridge.dates import Temporal, format_temporal, parse_temporal

ProviderId = Literal["google", "microsoft"]
AttendeeStatus = Literal["accepted", "tentative", "declined", "unknown"]
AttendeeType = Literal["required", "optional", "resource"]

# date, UTC instant or zoned datetime; see gcal_bridge.dates
EventTime = Annotated[
    Any,
    AfterValidator(parse_temporal),
    PlainSerializer(format_temporal, return_type=str, when_used="json"),
]


class DomainModel(BaseModel):
    """Base model for all domain objects.

    - frozen=True: values are built once per mapping call and never mutated
    - alias_generator=to_camel: JSON uses providerId, accountId, ...
    - populate_by_name=True: allows both alias and field name for construction
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """camelCase JSON-ready dict without unset optionals."""
        result: dict[str, Any] = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return result


class Calendar(DomainModel):
    id: str
    provider_id: ProviderId
    name: str
    description: str | None = None
    time_zone: str | None = None
    primary: bool = False
    account_id: str
    color: str | None = None
    read_only: bool = False


class Attendee(DomainModel):
    id: str | None = None
    email: str | None = None
    name: str | None = None
    status: AttendeeStatus = "unknown"
    type: AttendeeType = "required"
    comment: str | None = None  # Google only
    additional_guests: int | None = None  # Google only


class JoinUrl(DomainModel):
    value: str
    label: str | None = None


class ConferenceEntryPoint(DomainModel):
    """One way of joining a conference (video, sip or phone)."""

    join_url: JoinUrl
    meeting_code: str | None = None
    access_code: str | None = None
    password: str | None = None


class Conference(DomainModel):
    """Online meeting attached to an event.

    ``id`` identifies the conferencing service (e.g. ``google-meet``, ``zoom``),
    ``conference_id`` is the provider's identifier for this particular meeting.
    ``extra`` carries add-on parameters for third-party conference solutions.
    """

    id: str | None = None
    conference_id: str | None = None
    name: str | None = None
    video: ConferenceEntryPoint | None = None
    sip: ConferenceEntryPoint | None = None
    phone: list[ConferenceEntryPoint] = []
    extra: dict[str, Any] | None = None


class EventResponse(DomainModel):
    """The current user's own response to an event."""

    status: AttendeeStatus
    comment: str | None = None


class CalendarEvent(DomainModel):
    id: str
    title: str
    description: str | None = None
    start: EventTime
    end: EventTime
    all_day: bool
    location: str | None = None
    status: str | None = None
    attendees: list[Attendee] = []
    url: str | None = None
    provider_id: ProviderId
    account_id: str
    calendar_id: str
    read_only: bool
    conference: Conference | None = None
    response: EventResponse | None = None


class CreateEventInput(DomainModel):
    title: str
    description: str | None = None
    location: str | None = None
    start: EventTime
    end: EventTime
    conference: Conference | None = None
    attendees: list[Attendee] | None = None


class UpdateEventInput(CreateEventInput):
    id: str


class TaskCollection(DomainModel):
    id: str
    title: str
    provider_id: ProviderId
    account_id: str


class Task(DomainModel):
    id: str
    title: str
    completed: date | None = None
    description: str | None = None
    due: date | None = None
    provider_id: ProviderId
    account_id: str
    task_collection_id: str


class CreateTaskInput(DomainModel):
    title: str
    description: str | None = None
    due: date | None = None
    completed: date | None = None
    task_collection_id: str


class UpdateTaskInput(CreateTaskInput):
    id: str


EventInput = Union[CreateEventInput, UpdateEventInput]
TaskInput = Union[CreateTaskInput, UpdateTaskInput]

__all__ = [
    "Attendee",
    "AttendeeStatus",
    "AttendeeType",
    "Calendar",
    "CalendarEvent",
    "Conference",
    "ConferenceEntryPoint",
    "CreateEventInput",
    "CreateTaskInput",
    "EventInput",
    "EventResponse",
    "JoinUrl",
    "ProviderId",
    "Task",
    "TaskCollection",
    "TaskInput",
    "Temporal",
    "UpdateEventInput",
    "UpdateTaskInput",
]
