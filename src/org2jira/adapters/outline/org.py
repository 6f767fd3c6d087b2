"""
Org Outline Store - Read and write heading properties in Org documents.

Implements the OutlineNodePort for headings of an Org-mode file.

Expected format:
    * TODO Heading title                                     :tag:
      SCHEDULED: <2024-03-04 Mon>
      :PROPERTIES:
      :JIRA_ID:  PROJ-12
      :StoryPoints: 3
      :END:
      :LOGBOOK:
      CLOCK: [2024-03-04 Mon 09:00]--[2024-03-04 Mon 10:30] =>  1:30
      :END:
      Body text becomes the issue description.

Only property drawers that were edited are rewritten; every other line
is rendered back exactly as it was read.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from ...core.ports.outline_store import JIRA_ID, OutlineNodePort


DEFAULT_TODO_KEYWORDS = ("TODO", "NEXT", "STARTED", "WAITING", "DONE", "CANCELLED")

HEADING_PATTERN = re.compile(r"^(\*+)\s+(.*?)\s*$")
TAGS_PATTERN = re.compile(r"\s+(:[\w@#%:]+:)$")
PLANNING_PATTERN = re.compile(r"^\s*(SCHEDULED|DEADLINE|CLOSED):")
PROPERTY_PATTERN = re.compile(r"^\s*:([^:\s]+):\s*(.*?)\s*$")
DRAWER_START_PATTERN = re.compile(r"^\s*:([A-Z]+):\s*$")
DRAWER_END_PATTERN = re.compile(r"^\s*:END:\s*$", re.IGNORECASE)
CLOCK_PATTERN = re.compile(r"^\s*CLOCK:.*=>\s*(\d+):(\d{2})\s*$")
TODO_SETTING_PATTERN = re.compile(r"^#\+(?:SEQ_)?TODO:\s*(.*)$", re.IGNORECASE)


def find_drawer_end(lines: list[str], start: int) -> Optional[int]:
    """Index of the :END: line closing the drawer opened at ``start``."""
    for index in range(start + 1, len(lines)):
        if DRAWER_END_PATTERN.match(lines[index]):
            return index
    return None


class OrgHeading(OutlineNodePort):
    """One heading of an Org document with its drawer and body."""

    def __init__(
        self,
        heading_line: str,
        level: int,
        title: str,
        todo_state: Optional[str] = None,
        tags: Iterable[str] = (),
        lines: Optional[list[str]] = None,
        properties: Optional[dict[str, str]] = None,
        drawer_index: int = 0,
        drawer_lines: Optional[list[str]] = None,
    ):
        self.heading_line = heading_line
        self.level = level
        self._title = title
        self._todo_state = todo_state
        self.tags = list(tags)
        self.lines = lines or []
        self.properties = dict(properties or {})
        self._drawer_index = drawer_index
        self._drawer_lines = drawer_lines
        self._dirty = False

    def __repr__(self) -> str:
        return f"OrgHeading({self.level}, {self._todo_state!r}, {self._title!r})"

    # -------------------------------------------------------------------------
    # OutlineNodePort Implementation
    # -------------------------------------------------------------------------

    @property
    def title(self) -> str:
        return self._title

    @property
    def todo_state(self) -> Optional[str]:
        return self._todo_state

    def get_property(self, name: str) -> Optional[str]:
        value = self.properties.get(name)
        return value if value else None

    def set_property(self, name: str, value: str) -> None:
        if self.properties.get(name) == value:
            return
        self.properties[name] = value
        self._dirty = True

    def export_body(self) -> str:
        """Body text without planning lines and drawers, dedented."""
        body: list[str] = []
        drawer_end = None

        for index, line in enumerate(self.lines):
            if drawer_end is not None:
                if index == drawer_end:
                    drawer_end = None
                continue
            if DRAWER_START_PATTERN.match(line):
                # An unclosed drawer is plain text
                drawer_end = find_drawer_end(self.lines, index)
                if drawer_end is not None:
                    continue
            if PLANNING_PATTERN.match(line) or CLOCK_PATTERN.match(line):
                continue
            body.append(line)

        indent = min(
            (len(line) - len(line.lstrip()) for line in body if line.strip()),
            default=0,
        )
        return "\n".join(line[indent:] for line in body).strip("\n")

    # -------------------------------------------------------------------------
    # Org Specific
    # -------------------------------------------------------------------------

    @property
    def issue_key(self) -> Optional[str]:
        return self.get_property(JIRA_ID)

    def clocked_seconds(self) -> int:
        """Total time of all CLOCK entries under this heading."""
        total = 0
        for line in self.lines:
            match = CLOCK_PATTERN.match(line)
            if match:
                total += int(match.group(1)) * 3600 + int(match.group(2)) * 60
        return total

    def render(self) -> list[str]:
        """Lines of this heading, including an updated drawer if edited."""
        if self._dirty or self._drawer_lines is None:
            drawer = self._render_drawer() if self.properties else []
        else:
            drawer = self._drawer_lines

        return (
            [self.heading_line]
            + self.lines[:self._drawer_index]
            + drawer
            + self.lines[self._drawer_index:]
        )

    def _render_drawer(self) -> list[str]:
        indent = " " * (self.level + 1)
        width = max(len(k) for k in self.properties) + 2
        lines = [f"{indent}:PROPERTIES:"]
        for key, value in self.properties.items():
            lines.append(f"{indent}{f':{key}:'.ljust(width + 1)}{value}".rstrip())
        lines.append(f"{indent}:END:")
        return lines


class OrgDocument:
    """
    Parsed Org document.

    Text before the first heading is kept verbatim as the preamble.
    """

    def __init__(
        self,
        preamble: list[str],
        headings: list[OrgHeading],
        path: Optional[Path] = None,
    ):
        self.preamble = preamble
        self.headings = headings
        self.path = path
        self.logger = logging.getLogger("OrgDocument")

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "OrgDocument":
        path = Path(path)
        document = cls.parse(path.read_text(encoding="utf-8"))
        document.path = path
        return document

    @classmethod
    def parse(
        cls,
        text: str,
        todo_keywords: Optional[Iterable[str]] = None,
    ) -> "OrgDocument":
        """
        Parse Org text into headings.

        Args:
            text: Document content
            todo_keywords: Workflow keywords; read from #+TODO lines or
                the defaults when not given
        """
        lines = text.splitlines()
        keywords = tuple(todo_keywords) if todo_keywords else cls._todo_keywords(lines)

        preamble: list[str] = []
        headings: list[OrgHeading] = []
        current: Optional[tuple[str, list[str]]] = None

        for line in lines:
            if HEADING_PATTERN.match(line):
                if current:
                    headings.append(cls._parse_heading(*current, keywords))
                current = (line, [])
            elif current:
                current[1].append(line)
            else:
                preamble.append(line)

        if current:
            headings.append(cls._parse_heading(*current, keywords))

        return cls(preamble, headings)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def find(self, title: str) -> Optional[OrgHeading]:
        """First heading whose title matches (case-insensitive)."""
        wanted = title.strip().lower()
        for heading in self.headings:
            if heading.title.lower() == wanted:
                return heading
        return None

    def linked_headings(self) -> list[OrgHeading]:
        """Headings that carry a JIRA_ID property."""
        return [h for h in self.headings if h.issue_key]

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def render(self) -> str:
        lines = list(self.preamble)
        for heading in self.headings:
            lines.extend(heading.render())
        return "\n".join(lines) + "\n"

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        target = Path(path) if path else self.path
        if target is None:
            raise ValueError("No path to save the document to")
        target.write_text(self.render(), encoding="utf-8")
        self.logger.info(f"Saved {target}")
        return target

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _todo_keywords(lines: list[str]) -> tuple[str, ...]:
        keywords: list[str] = []
        for line in lines:
            match = TODO_SETTING_PATTERN.match(line)
            if match:
                for word in match.group(1).split():
                    if word == "|":
                        continue
                    keywords.append(re.sub(r"\(.*\)$", "", word))
        return tuple(keywords) or DEFAULT_TODO_KEYWORDS

    @staticmethod
    def _parse_heading(
        heading_line: str,
        lines: list[str],
        keywords: tuple[str, ...],
    ) -> OrgHeading:
        match = HEADING_PATTERN.match(heading_line)
        stars, rest = match.group(1), match.group(2)

        tags: list[str] = []
        tag_match = TAGS_PATTERN.search(rest)
        if tag_match:
            tags = [t for t in tag_match.group(1).split(":") if t]
            rest = rest[:tag_match.start()]

        todo_state = None
        first, _, remainder = rest.partition(" ")
        if first in keywords:
            todo_state = first
            rest = remainder.strip()

        # Property drawer must follow the heading or its planning line
        drawer_index = 1 if lines and PLANNING_PATTERN.match(lines[0]) else 0
        properties: dict[str, str] = {}
        drawer_lines = None

        if (
            len(lines) > drawer_index
            and lines[drawer_index].strip().upper() == ":PROPERTIES:"
        ):
            end = find_drawer_end(lines, drawer_index)
            if end is not None:
                for line in lines[drawer_index + 1:end]:
                    prop = PROPERTY_PATTERN.match(line)
                    if prop:
                        properties[prop.group(1)] = prop.group(2)
                drawer_lines = lines[drawer_index:end + 1]
                lines = lines[:drawer_index] + lines[end + 1:]

        return OrgHeading(
            heading_line=heading_line,
            level=len(stars),
            title=rest.strip(),
            todo_state=todo_state,
            tags=tags,
            lines=lines,
            properties=properties,
            drawer_index=drawer_index,
            drawer_lines=drawer_lines,
        )
