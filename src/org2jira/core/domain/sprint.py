"""
Sprint Parser - Decode the greenhopper sprint custom field.

JIRA Agile serializes each sprint on an issue as a Java toString() dump:

    com.atlassian.greenhopper.service.sprint.Sprint@1f3c[id=37,rapidViewId=4,
    state=ACTIVE,name=Sprint 5,startDate=2024-03-04T09:00:00.000Z,...]

Parsing runs in two stages. First every bracketed segment is located,
then each segment is split on "," into tokens and each token on the
first "=" into a key and a value.
"""

import re
from collections.abc import Mapping
from typing import Any, Optional

from ..exceptions import MalformedSprintSegmentError


SprintAttribute = dict[str, str]

SEGMENT_PATTERN = re.compile(r"\[([^\[\]]+)\]")


def parse_segment(segment: str) -> SprintAttribute:
    """
    Split one segment body (without brackets) into attributes.

    Raises:
        MalformedSprintSegmentError: If a token has no "="
    """
    attributes: SprintAttribute = {}
    for token in segment.split(","):
        key, sep, value = token.partition("=")
        if not sep or not key.strip():
            raise MalformedSprintSegmentError(segment, token)
        attributes[key.strip()] = value
    return attributes


def parse_sprint_string(raw: str) -> list[SprintAttribute]:
    """Parse every bracketed segment of one encoded string, in order."""
    return [parse_segment(m.group(1)) for m in SEGMENT_PATTERN.finditer(raw)]


def parse_sprints(value: Any) -> list[SprintAttribute]:
    """
    Parse the raw value of the sprint custom field.

    Args:
        value: The field value: a list of encoded strings or sprint
            objects (newer JIRA versions), a single encoded string, or
            None when the issue has no sprint

    Returns:
        One attribute mapping per sprint, in order of appearance
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]

    sprints: list[SprintAttribute] = []
    for raw in value:
        if isinstance(raw, str):
            sprints.extend(parse_sprint_string(raw))
        elif isinstance(raw, Mapping):
            sprints.append({str(k): str(v) for k, v in raw.items()})
        else:
            raise MalformedSprintSegmentError(repr(raw), repr(raw))
    return sprints


def active_sprint(sprints: list[SprintAttribute]) -> Optional[SprintAttribute]:
    """Return the first sprint in ACTIVE state, if any."""
    for sprint in sprints:
        if sprint.get("state", "").upper() == "ACTIVE":
            return sprint
    return None
