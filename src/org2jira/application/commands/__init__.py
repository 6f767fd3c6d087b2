"""
Commands - Individual operations that can be executed.

Commands represent write operations and can be:
- Validated against caller preconditions
- Previewed in dry-run mode
- Logged for audit
"""

from .base import Command, CommandResult, CommandBatch
from .issue_commands import (
    CreateIssueCommand,
    LogWorkCommand,
    RefreshIssueCommand,
)

__all__ = [
    "Command",
    "CommandResult",
    "CommandBatch",
    "CreateIssueCommand",
    "LogWorkCommand",
    "RefreshIssueCommand",
]
