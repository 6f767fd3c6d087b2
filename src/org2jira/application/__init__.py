"""
Application Layer - Use cases and commands.

This layer contains:
- commands/: Individual operations (CreateIssue, LogWork, RefreshIssue)
- metadata: Issue creation metadata resolution
"""

from .metadata import IssueMetadataResolver, IssueTypeFieldMap, field_id
from .commands import (
    Command,
    CommandResult,
    CommandBatch,
    CreateIssueCommand,
    LogWorkCommand,
    RefreshIssueCommand,
)

__all__ = [
    "IssueMetadataResolver",
    "IssueTypeFieldMap",
    "field_id",
    "Command",
    "CommandResult",
    "CommandBatch",
    "CreateIssueCommand",
    "LogWorkCommand",
    "RefreshIssueCommand",
]
