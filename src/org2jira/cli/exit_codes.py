"""
Exit Codes - Process exit statuses of the org2jira CLI.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    NOT_FOUND = 3
    PRECONDITION_FAILED = 4
    TRANSPORT_ERROR = 5
    CANCELLED = 130
