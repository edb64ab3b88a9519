"""Plain dates, instants and zoned date-times, and their Google encodings.

Three shapes are used throughout the domain model:

- plain date: ``datetime.date`` (all-day events, task dates)
- instant: aware ``datetime`` with a fixed-offset tzinfo, normalized to UTC
- zoned date-time: aware ``datetime`` whose tzinfo is a ``ZoneInfo``

In JSON they are written as ``2026-02-17``, ``2026-02-17T08:00:00Z`` and
``2026-02-17T09:00:00+01:00[Europe/Paris]``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from gcal_bridge.errors import InvalidInputError, InvalidPayloadError

Temporal = Union[date, datetime]

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ZONE_SUFFIX = re.compile(r"^(?P<dt>[^\[]+)\[(?P<zone>[^\]]+)\]$")


def _fromisoformat(value: str) -> datetime:
    """datetime.fromisoformat that also accepts a trailing 'Z' on 3.10."""
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _zone(key: str) -> ZoneInfo:
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidPayloadError(f"Unknown time zone: {key!r}") from e


def is_zoned(value: datetime) -> bool:
    """True when *value* carries an IANA zone rather than a bare offset."""
    return isinstance(value.tzinfo, ZoneInfo)


def parse_temporal(value: Temporal | str) -> Temporal:
    """Coerce a JSON temporal string (or an existing value) to a domain temporal.

    Naive datetimes are rejected: an event time must be an instant or zoned.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise InvalidInputError(f"Datetime {value.isoformat()} has no time zone or offset")
        return value
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidInputError(f"Expected a date or date-time string, got {type(value).__name__}")

    text = value.strip()
    if _DATE_ONLY.match(text):
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise InvalidInputError(f"Invalid date: {text!r}") from e

    zone_key = None
    match = _ZONE_SUFFIX.match(text)
    if match:
        text, zone_key = match.group("dt"), match.group("zone")

    try:
        parsed = _fromisoformat(text)
    except ValueError as e:
        raise InvalidInputError(f"Invalid date-time: {value!r}") from e

    if zone_key is not None:
        try:
            zone = _zone(zone_key)
        except InvalidPayloadError as e:
            raise InvalidInputError(str(e)) from e
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=zone)
        return parsed.astimezone(zone)

    if parsed.tzinfo is None:
        raise InvalidInputError(
            f"Date-time {value!r} has no offset",
            suggestions=["Append Z or an offset, or a zone suffix such as [Europe/Paris]"],
        )
    return parsed.astimezone(timezone.utc)


def format_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def format_temporal(value: Temporal) -> str:
    """Inverse of parse_temporal."""
    if isinstance(value, datetime):
        if is_zoned(value):
            return f"{value.isoformat()}[{value.tzinfo}]"
        return format_instant(value)
    return value.isoformat()


def to_google_calendar_date(value: Temporal) -> dict[str, str]:
    """Encode a temporal as a Google ``{date}`` or ``{dateTime, timeZone?}`` object."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise InvalidInputError(f"Datetime {value.isoformat()} has no time zone or offset")
        if is_zoned(value):
            return {"dateTime": value.isoformat(), "timeZone": str(value.tzinfo)}
        return {"dateTime": format_instant(value)}
    return {"date": value.isoformat()}


def parse_google_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidPayloadError(f"Invalid date: {value!r}") from e


def parse_google_date_time(value: str, time_zone: str | None = None) -> datetime:
    """Parse an RFC 3339 ``dateTime``; zoned when *time_zone* is given, else a UTC instant."""
    try:
        instant = _fromisoformat(value)
    except ValueError as e:
        raise InvalidPayloadError(f"Invalid date-time: {value!r}") from e
    if instant.tzinfo is None:
        raise InvalidPayloadError(f"Date-time {value!r} has no offset")
    if not time_zone:
        return instant.astimezone(timezone.utc)
    return instant.astimezone(_zone(time_zone))


def parse_google_task_date(value: str) -> date:
    """Google Tasks dates are RFC 3339 timestamps; only the date part is meaningful."""
    return parse_google_date(value.split("T")[0])
