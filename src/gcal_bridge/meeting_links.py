"""Meeting-link detection: recognize which conferencing service a URL belongs to."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class MeetingLink:
    """A URL recognized as belonging to a conferencing service."""

    id: str
    name: str
    join_url: str
    meeting_code: str | None = None


@dataclass(frozen=True)
class MeetingService:
    id: str
    name: str
    patterns: tuple[re.Pattern[str], ...]
    canonical: Callable[[str, str | None], str] | None = None

    def detect(self, url: str) -> MeetingLink | None:
        for pattern in self.patterns:
            match = pattern.match(url)
            if match is None:
                continue
            code = match.groupdict().get("code")
            join_url = self.canonical(url, code) if self.canonical else url
            return MeetingLink(id=self.id, name=self.name, join_url=join_url, meeting_code=code)
        return None


def _p(regex: str) -> re.Pattern[str]:
    # Anchored at the scheme; the path segment must end at a delimiter or end of URL
    return re.compile(r"^https?://" + regex + r"(?:[/?#].*)?$", re.IGNORECASE)


def _google_meet_url(url: str, code: str | None) -> str:
    return f"https://meet.google.com/{code.lower()}" if code else url


SERVICES: tuple[MeetingService, ...] = (
    MeetingService(
        "google-meet",
        "Google Meet",
        (
            _p(r"meet\.google\.com/(?P<code>[a-z]{3}-[a-z]{4}-[a-z]{3})"),
            _p(r"meet\.google\.com/lookup/(?P<code>[\w-]+)"),
        ),
        canonical=_google_meet_url,
    ),
    MeetingService(
        "zoom",
        "Zoom",
        (
            _p(r"(?:[\w-]+\.)?zoom(?:gov)?\.(?:us|com)/(?:j|w|s|wc/join)/(?P<code>\d+)"),
            _p(r"(?:[\w-]+\.)?zoom(?:gov)?\.(?:us|com)/my/(?P<code>[\w.-]+)"),
        ),
    ),
    MeetingService(
        "microsoft-teams",
        "Microsoft Teams",
        (
            _p(r"teams\.microsoft\.com/l/meetup-join/(?P<code>[^/?#]+)"),
            _p(r"teams\.live\.com/meet/(?P<code>\d+)"),
        ),
    ),
    MeetingService(
        "webex",
        "Webex",
        (
            _p(r"[\w-]+\.webex\.com/(?:meet|join)/(?P<code>[\w.-]+)"),
            _p(r"[\w-]+\.webex\.com/[\w-]+/j\.php"),
        ),
    ),
    MeetingService(
        "gotomeeting",
        "GoTo Meeting",
        (
            _p(r"(?:global|app)\.gotomeeting\.com/join/(?P<code>\d+)"),
            _p(r"meet\.goto\.com/(?P<code>\d+)"),
        ),
    ),
    MeetingService("bluejeans", "BlueJeans", (_p(r"(?:[\w-]+\.)?bluejeans\.com/(?P<code>\d+)"),)),
    MeetingService("whereby", "Whereby", (_p(r"whereby\.com/(?P<code>[\w-]+)"),)),
    MeetingService("jitsi", "Jitsi Meet", (_p(r"meet\.jit\.si/(?P<code>[\w-]+)"),)),
    MeetingService("chime", "Amazon Chime", (_p(r"(?:app\.)?chime\.aws/(?P<code>\d+)"),)),
    MeetingService("skype", "Skype", (_p(r"join\.skype\.com/(?P<code>\w+)"),)),
)


def detect_meeting_link(url: str) -> MeetingLink | None:
    """Return the service a URL belongs to, or None if unrecognized."""
    url = url.strip()
    if not url:
        return None
    for service in SERVICES:
        link = service.detect(url)
        if link is not None:
            return link
    return None
