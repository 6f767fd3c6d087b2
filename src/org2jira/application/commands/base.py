"""
Command Base - Shared infrastructure for write operations.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ...core.domain.events import DomainEvent, EventBus


@dataclass
class CommandResult:
    """Outcome of executing a command."""

    success: bool = True
    data: Any = None
    error: Optional[str] = None
    dry_run: bool = False
    skipped: bool = False
    skip_reason: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, dry_run: bool = False) -> "CommandResult":
        return cls(success=True, data=data, dry_run=dry_run)

    @classmethod
    def fail(cls, error: str) -> "CommandResult":
        return cls(success=False, error=error)

    @classmethod
    def skip(cls, reason: str) -> "CommandResult":
        return cls(success=True, skipped=True, skip_reason=reason)


class Command(ABC):
    """
    A single write operation against the issue tracker.

    Subclasses implement validate() and _execute(); execute() handles
    validation, dry-run short-circuiting and logging.
    """

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        dry_run: bool = True,
    ):
        self.event_bus = event_bus
        self.dry_run = dry_run
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable description of the command."""
        ...

    def validate(self) -> Optional[str]:
        """Return an error message if preconditions are not met."""
        return None

    def execute(self) -> CommandResult:
        """Validate, then run the command unless in dry-run mode."""
        error = self.validate()
        if error:
            self.logger.warning(f"{self.name}: {error}")
            return CommandResult.fail(error)

        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would {self.name}")
            return CommandResult.ok(dry_run=True)

        return self._execute()

    @abstractmethod
    def _execute(self) -> CommandResult:
        ...

    def _publish(self, event: DomainEvent) -> None:
        if self.event_bus:
            self.event_bus.publish(event)


class CommandBatch:
    """Runs several commands in order, optionally stopping on failure."""

    def __init__(self, stop_on_error: bool = False):
        self.stop_on_error = stop_on_error
        self.commands: list[Command] = []
        self.results: list[CommandResult] = []

    def add(self, command: Command) -> "CommandBatch":
        self.commands.append(command)
        return self

    def execute_all(self) -> list[CommandResult]:
        self.results = []
        for command in self.commands:
            result = command.execute()
            self.results.append(result)
            if not result.success and self.stop_on_error:
                break
        return self.results

    @property
    def all_succeeded(self) -> bool:
        return all(r.success for r in self.results)

    @property
    def executed_count(self) -> int:
        """Commands that succeeded and were not skipped."""
        return sum(1 for r in self.results if r.success and not r.skipped)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)
