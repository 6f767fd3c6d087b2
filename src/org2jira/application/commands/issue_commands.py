"""
Issue Commands - Create issues, log work and refresh outline properties.
"""

from typing import Any, Optional

from ...core.domain.events import EventBus, IssueCreated, IssueRefreshed, WorklogAdded
from ...core.domain.issue_requests import IssueRequestBuilder
from ...core.domain.sprint import active_sprint
from ...core.exceptions import MissingFieldError, Org2JiraError
from ...core.ports.outline_store import (
    COMPONENT,
    EFFORT,
    JIRA_EPIC,
    JIRA_ID,
    SPRINT,
    STORY_POINTS,
    OutlineNodePort,
)
from ...core.ports.transport import TransportPort
from ..metadata import IssueTypeFieldMap
from .base import Command, CommandResult


class CreateIssueCommand(Command):
    """
    Create a JIRA issue from an outline heading.

    The new issue key is written back to the heading's JIRA_ID property.
    When a field map is given, the issue type and epic link field are
    checked against it before anything is sent.
    """

    def __init__(
        self,
        transport: TransportPort,
        builder: IssueRequestBuilder,
        node: OutlineNodePort,
        issue_type: str,
        field_map: Optional[IssueTypeFieldMap] = None,
        event_bus: Optional[EventBus] = None,
        dry_run: bool = True,
    ):
        super().__init__(event_bus=event_bus, dry_run=dry_run)
        self.transport = transport
        self.builder = builder
        self.node = node
        self.issue_type = issue_type
        self.field_map = field_map

    @property
    def name(self) -> str:
        return f"create {self.issue_type} '{self.node.title[:50]}'"

    def validate(self) -> Optional[str]:
        existing = self.node.get_property(JIRA_ID)
        if existing:
            return f"Heading is already linked to {existing}"
        if not self.node.todo_state:
            return "Heading has no TODO state"
        if not self.node.title.strip():
            return "Heading has no title"

        if self.field_map is not None:
            if self.issue_type not in self.field_map:
                return f"Issue type '{self.issue_type}' is not available in project {self.builder.project_key}"
            epic_field = self.builder.fields.epic_link
            if (
                self.node.get_property(JIRA_EPIC)
                and epic_field not in self.field_map[self.issue_type].values()
            ):
                return f"Issue type '{self.issue_type}' has no epic link field ({epic_field})"
        return None

    def _execute(self) -> CommandResult:
        payload = self.builder.build_create_payload(
            title=self.node.title,
            description=self.node.export_body(),
            issue_type=self.issue_type,
            component=self.node.get_property(COMPONENT),
            epic_link=self.node.get_property(JIRA_EPIC),
        )

        try:
            response = self.transport.request("POST", "issue", payload)
            key = self.builder.extract_key(response)
        except Org2JiraError as e:
            self.logger.error(f"Failed to {self.name}: {e}")
            return CommandResult.fail(str(e))

        self.node.set_property(JIRA_ID, key)
        self.logger.info(f"Created {key}")
        self._publish(IssueCreated(
            issue_key=key,
            summary=self.node.title,
            issue_type=self.issue_type,
        ))
        return CommandResult.ok(key)


class LogWorkCommand(Command):
    """Log time spent against an issue."""

    def __init__(
        self,
        transport: TransportPort,
        builder: IssueRequestBuilder,
        issue_key: str,
        seconds: int,
        comment: Optional[str] = None,
        event_bus: Optional[EventBus] = None,
        dry_run: bool = True,
    ):
        super().__init__(event_bus=event_bus, dry_run=dry_run)
        self.transport = transport
        self.builder = builder
        self.issue_key = issue_key
        self.seconds = seconds
        self.comment = comment

    @property
    def name(self) -> str:
        return f"log {self.builder.codec.encode(max(self.seconds, 0)) or '0m'} on {self.issue_key}"

    def validate(self) -> Optional[str]:
        if not self.issue_key:
            return "Missing issue key"
        if self.seconds <= 0:
            return f"Time spent must be positive, got {self.seconds}s"
        return None

    def _execute(self) -> CommandResult:
        payload = self.builder.build_worklog_payload(self.seconds, self.comment)

        try:
            response = self.transport.request(
                "POST", f"issue/{self.issue_key}/worklog", payload
            )
        except Org2JiraError as e:
            self.logger.error(f"Failed to {self.name}: {e}")
            return CommandResult.fail(str(e))

        self.logger.info(f"Logged {self.seconds}s on {self.issue_key}")
        self._publish(WorklogAdded(issue_key=self.issue_key, seconds=self.seconds))
        return CommandResult.ok(response.get("id"))


class RefreshIssueCommand(Command):
    """
    Copy story points, original estimate and active sprint from the
    linked issue into the heading's properties.

    Fields the issue does not carry are left untouched on the heading
    and reported in the result's ``missing`` list.
    """

    def __init__(
        self,
        transport: TransportPort,
        builder: IssueRequestBuilder,
        node: OutlineNodePort,
        event_bus: Optional[EventBus] = None,
        dry_run: bool = False,
    ):
        super().__init__(event_bus=event_bus, dry_run=dry_run)
        self.transport = transport
        self.builder = builder
        self.node = node

    @property
    def name(self) -> str:
        return f"refresh '{self.node.title[:50]}'"

    @property
    def issue_key(self) -> Optional[str]:
        return self.node.get_property(JIRA_ID)

    def validate(self) -> Optional[str]:
        if not self.issue_key:
            return "Heading is not linked to an issue"
        return None

    def _execute(self) -> CommandResult:
        fields = self.builder.fields
        wanted = ",".join([fields.story_points, "timetracking", fields.sprint])

        try:
            issue = self.transport.request(
                "GET", f"issue/{self.issue_key}?fields={wanted}"
            )
        except Org2JiraError as e:
            self.logger.error(f"Failed to {self.name}: {e}")
            return CommandResult.fail(str(e))

        data: dict[str, Any] = {"issue_key": self.issue_key, "missing": []}

        # Extract everything before writing; a malformed value leaves
        # the heading unchanged.
        try:
            points = self._extract(self.builder.extract_story_points, issue, data)
            effort = self._extract(self.builder.extract_original_estimate, issue, data)
            sprints = self._extract(self.builder.extract_sprints, issue, data)
        except Org2JiraError as e:
            self.logger.error(f"Failed to {self.name}: {e}")
            return CommandResult.fail(str(e))

        if points is not None:
            self.node.set_property(STORY_POINTS, str(points))
            data["story_points"] = points

        if effort is not None:
            if effort:
                self.node.set_property(EFFORT, effort)
            data["effort"] = effort

        if sprints is not None:
            sprint = active_sprint(sprints)
            if sprint and sprint.get("name"):
                self.node.set_property(SPRINT, sprint["name"])
            data["sprint"] = sprint.get("name") if sprint else None

        for message in data["missing"]:
            self.logger.warning(f"{self.issue_key}: {message}")

        self._publish(IssueRefreshed(
            issue_key=self.issue_key,
            story_points=data.get("story_points"),
            effort=data.get("effort"),
            sprint=data.get("sprint"),
        ))
        return CommandResult.ok(data)

    @staticmethod
    def _extract(extractor, issue: dict, data: dict[str, Any]) -> Any:
        """Run one extractor, recording a missing field instead of raising."""
        try:
            return extractor(issue)
        except MissingFieldError as e:
            data["missing"].append(str(e))
            return None
