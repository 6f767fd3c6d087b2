"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Transport: Jira REST API over requests
- Outline: Org-mode documents
- Config: Environment variables and .env files
"""

from .jira import JiraApiClient
from .outline import OrgDocument, OrgHeading
from .config import EnvironmentConfigProvider

__all__ = [
    "JiraApiClient",
    "OrgDocument",
    "OrgHeading",
    "EnvironmentConfigProvider",
]
