"""
Issue Request Builder - Payloads out, canonical values in.

Builds the request bodies for issue creation and work logging, and pulls
canonical values (issue key, story points, original estimate, sprints)
out of fetched issue records.
"""

from collections.abc import Mapping
from typing import Any, Optional

from ..exceptions import MissingFieldError, UnexpectedResponseError
from ..ports.config_provider import FieldConfig
from .duration import DurationCodec
from .fields import get_field
from .sprint import SprintAttribute, parse_sprints


ORIGINAL_ESTIMATE_PATH = ("fields", "timetracking", "originalEstimateSeconds")


class IssueRequestBuilder:
    """
    Translates between plain values and JIRA issue JSON for one project.

    Args:
        project_key: Project new issues are created in
        fields: Custom field identifiers of the JIRA instance
        codec: Duration codec used for rendering estimates
    """

    def __init__(
        self,
        project_key: str,
        fields: Optional[FieldConfig] = None,
        codec: Optional[DurationCodec] = None,
    ):
        self.project_key = project_key
        self.fields = fields or FieldConfig()
        self.codec = codec or DurationCodec()

    # -------------------------------------------------------------------------
    # Outgoing Payloads
    # -------------------------------------------------------------------------

    def build_create_payload(
        self,
        title: str,
        description: str,
        issue_type: str,
        component: Optional[str] = None,
        epic_link: Optional[str] = None,
    ) -> dict[str, Any]:
        """Assemble the body of ``POST issue``."""
        fields: dict[str, Any] = {
            "project": {"key": self.project_key},
            "summary": title,
            "description": description,
            "issuetype": {"name": issue_type},
            "components": [{"name": component}] if component else [],
        }

        if epic_link:
            fields[self.fields.epic_link] = epic_link

        return {"fields": fields}

    def build_worklog_payload(
        self,
        seconds: int,
        comment: Optional[str] = None,
    ) -> dict[str, Any]:
        """Assemble the body of ``POST issue/{key}/worklog``."""
        payload: dict[str, Any] = {"timeSpentSeconds": seconds}
        if comment:
            payload["comment"] = comment
        return payload

    # -------------------------------------------------------------------------
    # Incoming Records
    # -------------------------------------------------------------------------

    def extract_key(self, response: Any) -> str:
        """
        Get the key of a freshly created issue.

        Raises:
            UnexpectedResponseError: If the response carries no key
        """
        key = response.get("key") if isinstance(response, Mapping) else None
        if not key:
            raise UnexpectedResponseError(
                "Create response did not contain an issue key",
                response=response,
            )
        return str(key)

    def extract_story_points(self, issue: Mapping) -> int:
        """
        Read the story points field rounded to an integer.

        Uses the built-in round(), so halves go to the even neighbour
        (2.5 -> 2, 3.5 -> 4).
        """
        path = ("fields", self.fields.story_points)
        value = get_field(issue, *path)
        if value is None:
            raise MissingFieldError(path[-1], path[:-1])
        try:
            return round(float(value))
        except (TypeError, ValueError, OverflowError) as e:
            raise UnexpectedResponseError(
                f"Story points field {path[-1]} is not a number: {value!r}",
                response=issue,
            ) from e

    def extract_original_estimate_seconds(self, issue: Mapping) -> int:
        value = get_field(issue, *ORIGINAL_ESTIMATE_PATH)
        if value is None:
            raise MissingFieldError(ORIGINAL_ESTIMATE_PATH[-1], ORIGINAL_ESTIMATE_PATH[:-1])
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise UnexpectedResponseError(
                f"Original estimate is not a number of seconds: {value!r}",
                response=issue,
            ) from e

    def extract_original_estimate_minutes(self, issue: Mapping) -> int:
        """Original estimate in whole minutes, always rounded up."""
        return -(-self.extract_original_estimate_seconds(issue) // 60)

    def extract_original_estimate(self, issue: Mapping) -> str:
        """Original estimate rendered as a duration string (e.g. "1d 4h")."""
        return self.codec.encode(self.extract_original_estimate_seconds(issue))

    def extract_sprints(self, issue: Mapping) -> list[SprintAttribute]:
        """All sprints recorded on the issue, oldest first."""
        return parse_sprints(get_field(issue, "fields", self.fields.sprint))
