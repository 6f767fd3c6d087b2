"""
Domain Events - Things that happened in the domain.

Events are immutable records of something that occurred.
They enable loose coupling and audit trails.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class IssueCreated(DomainEvent):
    """Event: An outline heading was turned into a JIRA issue."""

    issue_key: str = ""
    summary: str = ""
    issue_type: str = ""


@dataclass(frozen=True)
class WorklogAdded(DomainEvent):
    """Event: Time was logged against an issue."""

    issue_key: str = ""
    seconds: int = 0


@dataclass(frozen=True)
class IssueRefreshed(DomainEvent):
    """Event: Outline properties were refreshed from an issue."""

    issue_key: str = ""
    story_points: Optional[int] = None
    effort: Optional[str] = None
    sprint: Optional[str] = None


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.
    """

    def __init__(self):
        self._handlers: dict[type, list[Callable]] = {}
        self._history: list[DomainEvent] = []

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        self._handlers.setdefault(event_type, []).append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)

        for handler in self._handlers.get(type(event), []):
            handler(event)

        # Catch-all handlers
        for handler in self._handlers.get(DomainEvent, []):
            handler(event)

    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()

    def clear_history(self) -> None:
        self._history.clear()
