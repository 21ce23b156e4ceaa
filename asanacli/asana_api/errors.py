"""Error types raised by the Asana API layer."""

from typing import Optional


class AsanaError(Exception):
    """Base class for anything that goes wrong talking to Asana."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


# Failures surfaced by task submission share the client's taxonomy.
SubmissionError = AsanaError


class NetworkError(AsanaError):
    """Transport failure: timeout, refused connection, DNS."""


class RejectedError(AsanaError):
    """Asana answered with a non-2xx status."""


class MalformedResponseError(AsanaError):
    """Asana answered 2xx but the body is not what we expect."""


class ConfigError(AsanaError):
    """Local configuration is missing or invalid."""
