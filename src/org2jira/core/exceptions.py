"""
Exceptions - Centralized exception hierarchy.

Every error raised by org2jira derives from Org2JiraError so callers
can catch the whole family in one place.
"""

from typing import Any, Optional


class Org2JiraError(Exception):
    """Base class for all org2jira errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


# -------------------------------------------------------------------------
# Record / Response Errors
# -------------------------------------------------------------------------

class MissingFieldError(Org2JiraError):
    """A required path segment is absent in a fetched record."""

    def __init__(self, token: Any, walked: tuple = ()):
        self.token = token
        self.walked = tuple(walked)
        location = " -> ".join(str(t) for t in self.walked) or "<root>"
        super().__init__(f"Missing field {token!r} under {location}")


class ProjectNotFoundError(Org2JiraError):
    """The requested project key is absent from a metadata response."""

    def __init__(self, project_key: str):
        self.project_key = project_key
        super().__init__(f"Project not found in create metadata: {project_key}")


class UnexpectedResponseError(Org2JiraError):
    """A response lacks an expected key. Carries the raw response."""

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


class MalformedSprintSegmentError(Org2JiraError):
    """A sprint segment token could not be split into key and value."""

    def __init__(self, segment: str, token: str):
        self.segment = segment
        self.token = token
        super().__init__(f"Malformed sprint token {token!r} in segment [{segment}]")


# -------------------------------------------------------------------------
# Transport Errors
# -------------------------------------------------------------------------

class TransportError(Org2JiraError):
    """An HTTP call against the issue tracker failed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.path = path
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Credentials were rejected (HTTP 401)."""


class PermissionDeniedError(TransportError):
    """The user may not access the resource (HTTP 403)."""


class NotFoundError(TransportError):
    """The resource does not exist (HTTP 404)."""


# -------------------------------------------------------------------------
# Configuration Errors
# -------------------------------------------------------------------------

class ConfigError(Org2JiraError):
    """Configuration is missing or invalid."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid configuration")
