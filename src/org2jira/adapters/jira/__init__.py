"""
Jira Adapter - Transport implementation for Atlassian Jira.
"""

from .client import JiraApiClient

__all__ = ["JiraApiClient"]
