"""
Config Provider Port - Abstract interface for configuration sources.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class FieldConfig:
    """
    Custom field identifiers of one JIRA installation.

    These differ between instances and JIRA Agile versions, so they are
    never hard-coded at the call sites.
    """

    story_points: str = "customfield_10002"
    epic_link: str = "customfield_10008"
    sprint: str = "customfield_10007"


@dataclass
class TrackerConfig:
    """Issue tracker connection settings (credentials live elsewhere)."""

    url: str
    project_key: Optional[str] = None
    issue_type: str = "Task"
    fields: FieldConfig = field(default_factory=FieldConfig)
    timeout: float = 30.0


@dataclass
class AppConfig:
    """Complete application configuration."""

    tracker: TrackerConfig
    dry_run: bool = True
    verbose: bool = False
    org_path: Optional[str] = None


class ConfigProviderPort(ABC):
    """Abstract interface for configuration providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load the complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single configuration value."""
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate the configuration.

        Returns:
            List of error messages (empty if valid)
        """
        ...
