"""
Domain - Pure transformations over JIRA field representations.
"""

from .duration import DurationCodec, DurationUnit, DEFAULT_UNITS, encode_duration
from .fields import get_field
from .sprint import SprintAttribute, parse_sprints, parse_segment, active_sprint
from .issue_requests import IssueRequestBuilder
from .events import (
    DomainEvent,
    EventBus,
    IssueCreated,
    IssueRefreshed,
    WorklogAdded,
)

__all__ = [
    "DurationCodec",
    "DurationUnit",
    "DEFAULT_UNITS",
    "encode_duration",
    "get_field",
    "SprintAttribute",
    "parse_sprints",
    "parse_segment",
    "active_sprint",
    "IssueRequestBuilder",
    "DomainEvent",
    "EventBus",
    "IssueCreated",
    "IssueRefreshed",
    "WorklogAdded",
]
