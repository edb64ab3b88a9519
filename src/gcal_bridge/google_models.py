"""Pydantic models for the Google Calendar and Google Tasks wire formats.

Only the fields the adapter reads or writes are declared; everything else in
a payload is ignored.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

GoogleAttendeeResponseStatus = Literal["needsAction", "declined", "tentative", "accepted"]
GoogleAccessRole = Literal["freeBusyReader", "reader", "writer", "owner"]
EntryPointType = Literal["video", "phone", "sip", "more"]


class GoogleModel(BaseModel):
    """Base model for all Google API objects.

    - extra="ignore": resilient to API additions (new fields don't break us)
    - populate_by_name=True: allows both alias and field name for construction
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Request body dict with unset fields dropped."""
        result: dict[str, Any] = self.model_dump(by_alias=True, exclude_none=True)
        return result


class EventDateTime(GoogleModel):
    """Either ``date`` (all-day) or ``dateTime`` with an optional ``timeZone``."""

    date: str | None = None
    dateTime: str | None = None
    timeZone: str | None = None


class EventAttendee(GoogleModel):
    id: str | None = None
    email: str | None = None
    displayName: str | None = None
    organizer: bool | None = None
    is_self: bool | None = Field(None, alias="self")
    resource: bool | None = None
    optional: bool | None = None
    responseStatus: GoogleAttendeeResponseStatus | str | None = None
    comment: str | None = None
    additionalGuests: int | None = None


class ConferenceEntryPoint(GoogleModel):
    entryPointType: EntryPointType | str | None = None
    uri: str | None = None
    label: str | None = None
    pin: str | None = None
    accessCode: str | None = None
    meetingCode: str | None = None
    passcode: str | None = None
    password: str | None = None


class ConferenceSolutionKey(GoogleModel):
    type: str | None = None


class ConferenceSolution(GoogleModel):
    key: ConferenceSolutionKey | None = None
    name: str | None = None
    iconUri: str | None = None


class AddOnParameters(GoogleModel):
    parameters: dict[str, str] = {}


class ConferenceParameters(GoogleModel):
    addOnParameters: AddOnParameters | None = None


class ConferenceData(GoogleModel):
    conferenceId: str | None = None
    conferenceSolution: ConferenceSolution | None = None
    entryPoints: list[ConferenceEntryPoint] | None = None
    parameters: ConferenceParameters | None = None
    notes: str | None = None


class EventSource(GoogleModel):
    url: str | None = None
    title: str | None = None


class EventAttachment(GoogleModel):
    fileUrl: str | None = None
    title: str | None = None
    mimeType: str | None = None


class EventGadget(GoogleModel):
    """Deprecated gadget attachment; old add-ons stored meeting links here."""

    link: str | None = None
    title: str | None = None
    type: str | None = None


class GoogleCalendarEvent(GoogleModel):
    """Google Calendar event resource (response)."""

    id: str | None = None
    status: str | None = None
    htmlLink: str | None = None
    summary: str | None = None
    description: str | None = None
    location: str | None = None
    start: EventDateTime | None = None
    end: EventDateTime | None = None
    attendees: list[EventAttendee] | None = None
    hangoutLink: str | None = None
    conferenceData: ConferenceData | None = None
    source: EventSource | None = None
    attachments: list[EventAttachment] | None = None
    gadget: EventGadget | None = None


class GoogleCalendarEventCreateParams(GoogleModel):
    """Request body for events.insert / events.update."""

    id: str | None = None
    summary: str | None = None
    description: str | None = None
    location: str | None = None
    start: EventDateTime | None = None
    end: EventDateTime | None = None
    attendees: list[EventAttendee] | None = None
    conferenceData: ConferenceData | None = None
    conferenceDataVersion: int | None = None


class GoogleCalendarListEntry(GoogleModel):
    """Entry in the user's calendar list."""

    id: str | None = None
    summary: str | None = None
    summaryOverride: str | None = None
    description: str | None = None
    location: str | None = None
    timeZone: str | None = None
    primary: bool | None = None
    accessRole: GoogleAccessRole | str | None = None
    backgroundColor: str | None = None
    foregroundColor: str | None = None


class GoogleTask(GoogleModel):
    id: str | None = None
    title: str | None = None
    notes: str | None = None
    status: str | None = None
    due: str | None = None
    completed: str | None = None


class GoogleTaskUpdateParams(GoogleModel):
    """Request body for tasks.insert / tasks.update, plus the target ``tasklist``."""

    id: str | None = None
    title: str | None = None
    notes: str | None = None
    due: str | None = None
    status: Literal["needsAction", "completed"] | None = None
    completed: str | None = None
    tasklist: str | None = None


class GoogleTaskList(GoogleModel):
    id: str | None = None
    title: str | None = None
    updated: str | None = None
