"""Conference (online meeting) normalization between Google and the domain model.

Google has renamed entry-point credentials over time (``accessCode`` became
``meetingCode``, ``pin`` became ``password``/``passcode``).  Outbound entry
points carry both names; inbound parsing prefers the current name and falls
back to the legacy one.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from gcal_bridge.google_models import (
    AddOnParameters,
    ConferenceData,
    ConferenceEntryPoint,
    ConferenceParameters,
    ConferenceSolution,
    ConferenceSolutionKey,
)
from gcal_bridge.meeting_links import MeetingLink, detect_meeting_link
from gcal_bridge.models import Conference, JoinUrl
from gcal_bridge.models import ConferenceEntryPoint as DomainEntryPoint

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gcal_bridge.google_models import GoogleCalendarEvent

logger = logging.getLogger(__name__)

DEFAULT_SOLUTION_NAME = "Google Meet"

# domain attribute -> Google field names written on the way out (current first)
OUTBOUND_CODE_FIELDS: dict[str, tuple[str, ...]] = {
    "meeting_code": ("meetingCode", "accessCode"),
    "password": ("password", "passcode"),
    "access_code": ("accessCode", "pin"),
}

# domain attribute -> Google field names read on the way in (first non-empty wins)
INBOUND_CODE_FIELDS: dict[str, tuple[str, ...]] = {
    "meeting_code": ("meetingCode",),
    "access_code": ("accessCode", "pin"),
    "password": ("password", "passcode"),
}

# which domain credentials each entry point type carries outbound
_ENTRY_POINT_CODES: dict[str, tuple[str, ...]] = {
    "video": ("meeting_code", "password"),
    "sip": ("meeting_code", "password"),
    "phone": ("access_code",),
}

_URL_RE = re.compile(r"https?://[^\s<>\"'{}|\\^`\[\]]+", re.IGNORECASE)
_TRAILING_PUNCTUATION = ".,;:!?)"


def extract_urls(text: str) -> list[str]:
    """All http(s) URLs in free text, in order of appearance."""
    return [url.rstrip(_TRAILING_PUNCTUATION) for url in _URL_RE.findall(text)]


def to_join_url_label(join_url: str) -> str:
    """Short display label (host + path) for a join URL; unparsable input is returned verbatim."""
    try:
        parts = urlsplit(join_url)
    except ValueError:
        return join_url
    if not parts.scheme or not parts.hostname:
        return join_url
    return parts.hostname + (parts.path or "/")


def to_tel_uri(number: str) -> str:
    return number if number.startswith("tel:") else f"tel:{number}"


def _code_fields(entry: DomainEntryPoint, entry_point_type: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    for attr in _ENTRY_POINT_CODES[entry_point_type]:
        value = getattr(entry, attr)
        if value:
            for wire_name in OUTBOUND_CODE_FIELDS[attr]:
                fields[wire_name] = value
    return fields


def _param_value(value: Any) -> str:
    # add-on parameters are strings on the wire; booleans use JSON spelling
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def conference_solution_type(name: str | None) -> str:
    """Google conference solution key for a solution name."""
    if not name:
        return "hangoutsMeet"
    return "hangoutsMeet" if "google" in name.lower() else "addOn"


def to_google_calendar_conference_data(conference: Conference) -> ConferenceData:
    """Build Google ``conferenceData``: video, then sip, then one entry per phone number."""
    entry_points: list[ConferenceEntryPoint] = []

    video = conference.video
    if video is not None and video.join_url.value:
        entry_points.append(
            ConferenceEntryPoint(
                entryPointType="video",
                uri=video.join_url.value,
                label=video.join_url.label or to_join_url_label(video.join_url.value),
                **_code_fields(video, "video"),
            )
        )

    sip = conference.sip
    if sip is not None and sip.join_url.value:
        entry_points.append(
            ConferenceEntryPoint(
                entryPointType="sip",
                uri=sip.join_url.value,
                label=sip.join_url.label,
                **_code_fields(sip, "sip"),
            )
        )

    for phone in conference.phone:
        entry_points.append(
            ConferenceEntryPoint(
                entryPointType="phone",
                uri=to_tel_uri(phone.join_url.value),
                label=phone.join_url.label or phone.join_url.value,
                **_code_fields(phone, "phone"),
            )
        )

    parameters = None
    if conference.extra:
        parameters = ConferenceParameters(
            addOnParameters=AddOnParameters(parameters={k: _param_value(v) for k, v in conference.extra.items()})
        )

    return ConferenceData(
        conferenceId=conference.conference_id,
        conferenceSolution=ConferenceSolution(
            name=conference.name if conference.name is not None else DEFAULT_SOLUTION_NAME,
            key=ConferenceSolutionKey(type=conference_solution_type(conference.name)),
        ),
        entryPoints=entry_points or None,
        parameters=parameters,
    )


def _read_codes(entry_point: ConferenceEntryPoint) -> dict[str, str | None]:
    codes: dict[str, str | None] = {}
    for attr, wire_names in INBOUND_CODE_FIELDS.items():
        codes[attr] = next((getattr(entry_point, n) for n in wire_names if getattr(entry_point, n)), None)
    return codes


def _to_domain_entry_point(entry_point: ConferenceEntryPoint, uri: str) -> DomainEntryPoint:
    return DomainEntryPoint(
        join_url=JoinUrl(value=uri, label=entry_point.label),
        **_read_codes(entry_point),
    )


def _first_of_type(entry_points: list[ConferenceEntryPoint], entry_point_type: str) -> ConferenceEntryPoint | None:
    # Google sends at most one video and one sip entry point; if it ever sends
    # more, the first one wins and the rest are dropped.
    return next((e for e in entry_points if e.entryPointType == entry_point_type), None)


def _candidate_urls(event: GoogleCalendarEvent) -> Iterator[tuple[str, str]]:
    """(field, url) pairs in the order the fallback scan checks them."""
    if event.hangoutLink:
        yield "hangoutLink", event.hangoutLink
    if event.description:
        for url in extract_urls(event.description):
            yield "description", url
    if event.location:
        for url in extract_urls(event.location):
            yield "location", url
    if event.source is not None and event.source.url:
        yield "source", event.source.url
    for attachment in event.attachments or []:
        if attachment.fileUrl:
            yield "attachments", attachment.fileUrl
    if event.gadget is not None and event.gadget.link:
        yield "gadget", event.gadget.link


def _conference_from_link(link: MeetingLink) -> Conference:
    return Conference(
        id=link.id,
        name=link.name,
        video=DomainEntryPoint(join_url=JoinUrl(value=link.join_url), meeting_code=link.meeting_code),
    )


def parse_google_calendar_conference_fallback(event: GoogleCalendarEvent) -> Conference | None:
    """Find a meeting link in the event's free-form fields when there is no conferenceData."""
    for field, url in _candidate_urls(event):
        link = detect_meeting_link(url)
        if link is not None:
            logger.debug("event %s: %s link found in %s", event.id, link.id, field)
            return _conference_from_link(link)
    return None


def parse_google_calendar_conference_data(event: GoogleCalendarEvent) -> Conference | None:
    """Domain conference for an event, from conferenceData or, failing that, a link scan."""
    conference_data = event.conferenceData
    if logger.isEnabledFor(logging.DEBUG) and conference_data is not None:
        logger.debug("event %s conferenceData: %s", event.id, json.dumps(conference_data.to_payload()))

    if conference_data is None or not conference_data.entryPoints:
        return parse_google_calendar_conference_fallback(event)

    entry_points = conference_data.entryPoints
    video = _first_of_type(entry_points, "video")
    sip = _first_of_type(entry_points, "sip")
    phones = [e for e in entry_points if e.entryPointType == "phone"]

    service = detect_meeting_link(video.uri) if video is not None and video.uri else None
    solution = conference_data.conferenceSolution

    extra: dict[str, Any] | None = None
    if conference_data.parameters and conference_data.parameters.addOnParameters:
        extra = dict(conference_data.parameters.addOnParameters.parameters) or None

    return Conference(
        id=service.id if service else None,
        conference_id=conference_data.conferenceId,
        name=solution.name if solution else None,
        video=_to_domain_entry_point(video, video.uri) if video is not None and video.uri else None,
        sip=_to_domain_entry_point(sip, sip.uri) if sip is not None and sip.uri else None,
        phone=[_to_domain_entry_point(e, e.uri) for e in phones if e.uri],
        extra=extra,
    )
