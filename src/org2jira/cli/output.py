"""
Output - Console output formatting.

Provides pretty-printed output with colors and formatting.
"""

import sys
from typing import Optional

from ..application.commands import CommandResult
from ..application.metadata import IssueTypeFieldMap
from ..core.domain.events import DomainEvent
from ..core.domain.sprint import SprintAttribute


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"

    BG_YELLOW = "\033[43m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"
    GEAR = "⚙"

    BOX_H = "─"


class Console:
    """Console output helper with colors and formatting."""

    def __init__(self, color: bool = True, verbose: bool = False):
        self.color = color and sys.stdout.isatty()
        self.verbose = verbose

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        print(text)

    def header(self, text: str) -> None:
        width = max(len(text) + 4, 50)
        border = Colors.CYAN + Symbols.BOX_H * width + Colors.RESET if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def warning(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))

    def item(self, text: str, status: Optional[str] = None) -> None:
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "fail":
            status_str = self._c(f" [{Symbols.CROSS}]", Colors.RED)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        self.print("  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD)
            for i, h in enumerate(headers)
        ))
        self.print("  " + "  ".join("-" * w for w in widths))

        for row in rows:
            self.print("  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            ))

    def dry_run_banner(self) -> None:
        self.print()
        banner = f"  {Symbols.GEAR} DRY-RUN MODE - No changes will be made"
        if self.color:
            self.print(f"{Colors.BG_YELLOW}{Colors.BOLD}{banner}{Colors.RESET}")
        else:
            self.print(f"*** {banner} ***")
        self.print()

    # -------------------------------------------------------------------------
    # Domain Output
    # -------------------------------------------------------------------------

    def command_result(self, description: str, result: CommandResult) -> None:
        if not result.success:
            self.error(f"{description}: {result.error}")
        elif result.skipped:
            self.warning(f"{description}: skipped ({result.skip_reason})")
        elif result.dry_run:
            self.info(f"{description}: dry-run")
        else:
            self.success(f"{description}: {result.data}" if result.data else description)

    def sprints(self, issue_key: str, sprints: list[SprintAttribute]) -> None:
        self.section(f"Sprints of {issue_key}")
        if not sprints:
            self.detail("No sprints")
            return
        rows = [
            [s.get("id", ""), s.get("name", ""), s.get("state", ""), s.get("startDate", "")]
            for s in sprints
        ]
        self.table(["ID", "Name", "State", "Start"], rows)

    def event(self, event: DomainEvent) -> None:
        """Print a published domain event."""
        key = getattr(event, "issue_key", "")
        self.detail(f"{Symbols.ARROW} {event.event_type} {key}".rstrip())

    def field_map(self, project_key: str, field_map: IssueTypeFieldMap) -> None:
        self.section(f"Create fields of {project_key}")
        for issue_type, fields in sorted(field_map.items()):
            self.print()
            self.print(self._c(f"  {issue_type}", Colors.BOLD))
            if not fields:
                self.detail("(no fields)")
            for name, fid in sorted(fields.items()):
                self.item(f"{name} ({fid})")

    def confirm(self, message: str) -> bool:
        """Ask for confirmation."""
        prompt = self._c(f"\n{Symbols.WARN} {message} (y/N): ", Colors.YELLOW)
        try:
            response = input(prompt).strip().lower()
            return response in ("y", "yes")
        except (EOFError, KeyboardInterrupt):
            self.print()
            return False
