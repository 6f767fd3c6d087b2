"""
Issue Metadata Resolver - Which fields can an issue type be created with?

Queries JIRA's create metadata for a project and reduces it to a map of
issue type name -> field display name -> field id.
"""

import logging
from collections.abc import Mapping
from urllib.parse import urlencode

from ..core.exceptions import (
    MissingFieldError,
    ProjectNotFoundError,
    UnexpectedResponseError,
)
from ..core.ports.transport import TransportPort


IssueTypeFieldMap = dict[str, dict[str, str]]


class IssueMetadataResolver:
    """Builds an IssueTypeFieldMap per project from create metadata."""

    def __init__(self, transport: TransportPort):
        self.transport = transport
        self.logger = logging.getLogger("IssueMetadataResolver")

    def resolve(self, project_key: str) -> IssueTypeFieldMap:
        """
        Fetch create metadata for ``project_key`` and map its fields.

        Args:
            project_key: Project key (e.g. 'PROJ')

        Returns:
            Issue type name -> {field name: field id}

        Raises:
            ProjectNotFoundError: If the project is not in the response
            UnexpectedResponseError: If the response has no project list
        """
        query = urlencode({
            "projectKeys": project_key,
            "expand": "projects.issuetypes.fields",
        })
        response = self.transport.request("GET", f"issue/createmeta?{query}")
        return self.build_field_map(response, project_key)

    def build_field_map(self, response: Mapping, project_key: str) -> IssueTypeFieldMap:
        """Reduce a createmeta response to the field map of one project."""
        projects = response.get("projects") if isinstance(response, Mapping) else None
        if not isinstance(projects, list):
            raise UnexpectedResponseError(
                "Create metadata response has no project list",
                response=response,
            )

        field_map: IssueTypeFieldMap = {}
        found = False

        for project in projects:
            if project.get("key") != project_key:
                continue
            found = True

            for issue_type in project.get("issuetypes", []):
                fields = issue_type.get("fields") or {}
                field_map[issue_type["name"]] = {
                    schema.get("name", fid): fid
                    for fid, schema in fields.items()
                }

        if not found:
            raise ProjectNotFoundError(project_key)

        self.logger.debug(
            f"Resolved {len(field_map)} issue types for project {project_key}"
        )
        return field_map


def field_id(field_map: IssueTypeFieldMap, issue_type: str, field_name: str) -> str:
    """
    Look up the id of a field by its display name.

    Raises:
        MissingFieldError: If the issue type or the field is unknown
    """
    if issue_type not in field_map:
        raise MissingFieldError(issue_type)
    fields = field_map[issue_type]
    if field_name not in fields:
        raise MissingFieldError(field_name, (issue_type,))
    return fields[field_name]
