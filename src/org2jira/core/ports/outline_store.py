"""
Outline Store Port - Property access on one outline document node.
"""

from abc import ABC, abstractmethod
from typing import Optional


# Property names shared with the outline editor
JIRA_ID = "JIRA_ID"
STORY_POINTS = "StoryPoints"
EFFORT = "Effort"
JIRA_EPIC = "JIRA_EPIC"
COMPONENT = "COMPONENT"
SPRINT = "SPRINT"


class OutlineNodePort(ABC):
    """A heading in an outline document and its key-value properties."""

    @property
    @abstractmethod
    def title(self) -> str:
        ...

    @property
    @abstractmethod
    def todo_state(self) -> Optional[str]:
        """Workflow keyword of the heading (e.g. TODO, DONE), if any."""
        ...

    @abstractmethod
    def get_property(self, name: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_property(self, name: str, value: str) -> None:
        ...

    @abstractmethod
    def export_body(self) -> str:
        """Export the node content as plain text for an issue description."""
        ...
