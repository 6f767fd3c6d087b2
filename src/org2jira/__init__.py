"""
org2jira - Reconcile Org outline headings with Jira issues.

Translates Jira's field representations (raw estimate seconds, greenhopper
sprint strings, custom field ids) into plain values for outline
properties, and builds the payloads for creating issues and logging work.
"""

__version__ = "0.3.0"

from .core.domain import (
    DurationCodec,
    IssueRequestBuilder,
    encode_duration,
    get_field,
    parse_sprints,
)
from .core.exceptions import (
    Org2JiraError,
    MissingFieldError,
    ProjectNotFoundError,
    UnexpectedResponseError,
    MalformedSprintSegmentError,
)

__all__ = [
    "__version__",
    "DurationCodec",
    "IssueRequestBuilder",
    "encode_duration",
    "get_field",
    "parse_sprints",
    "Org2JiraError",
    "MissingFieldError",
    "ProjectNotFoundError",
    "UnexpectedResponseError",
    "MalformedSprintSegmentError",
]
