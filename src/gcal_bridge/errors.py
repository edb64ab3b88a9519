"""Exception hierarchy and structured error output."""

from __future__ import annotations

import json
import sys


class BridgeError(Exception):
    """Base exception for all gcal-bridge errors."""

    error_type: str = "bridge_error"
    suggestions: list[str] = []

    def __init__(self, message: str, suggestions: list[str] | None = None) -> None:
        super().__init__(message)
        if suggestions is not None:
            self.suggestions = suggestions


class MissingFieldError(BridgeError):
    """A field the provider always supplies is absent from the payload."""

    error_type = "missing_field"
    suggestions = [
        "Check that the payload is a complete Google API resource",
        "Partial responses (fields=...) must include the id",
    ]

    def __init__(self, message: str, field: str | None = None, suggestions: list[str] | None = None) -> None:
        super().__init__(message, suggestions)
        self.field = field


class InvalidPayloadError(BridgeError):
    """Provider payload does not match the expected schema."""

    error_type = "invalid_payload"


class InvalidInputError(BridgeError):
    """Create/update input cannot be encoded for the provider."""

    error_type = "invalid_input"


class ConfigError(BridgeError):
    """Configuration error (bad config file, invalid env var, etc.)."""

    error_type = "config_error"
    suggestions = [
        "Check gcal-bridge.toml or $GCB_CONFIG",
        "Or unset the offending GCB_* environment variable",
    ]


def output_error(error_type: str, message: str, suggestions: list[str] | None = None, exit_code: int = 1) -> None:
    """Write a structured error to stderr and exit."""
    err: dict[str, dict[str, str | list[str]]] = {"error": {"type": error_type, "message": message}}
    if suggestions:
        err["error"]["suggestions"] = suggestions
    print(json.dumps(err, ensure_ascii=False), file=sys.stderr)
    sys.exit(exit_code)
