"""
Central data model definitions used across the project.

A listing is the line-oriented text that travels through the whole tool:
it is built from the Canvas API, stored as the cache snapshot and handed to
the fuzzy selector. Each line looks like:

    Syllabus || https://canvas.example.edu/courses/101/pages/syllabus || Algorithms
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from canvasfzf.errors import SelectionParseError

SEPARATOR = " || "


@dataclass(frozen=True)
class Course:
    """
    One configured Canvas course.

    The name is only used to label listing lines.
    """

    course_id: int
    name: str


@dataclass(frozen=True)
class ModuleItem:
    """
    One flattened module item (page, file, link, ...) of a course.
    """

    title: str
    link: str
    course_name: str

    def to_line(self) -> str:
        return SEPARATOR.join((self.title, self.link, self.course_name))


def format_listing(items: Iterable[ModuleItem]) -> str:
    """
    Serialize items into a listing, one newline-terminated line per item.
    """
    return "".join(item.to_line() + "\n" for item in items)


def parse_listing(text: str) -> List[ModuleItem]:
    """
    Parse a listing back into ModuleItems.

    Blank lines are ignored. A line that does not hold three fields is
    reported as a SelectionParseError.
    """
    items: List[ModuleItem] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = line.split(SEPARATOR)
        if len(parts) != 3:
            raise SelectionParseError(f"expected 3 fields in listing line, got {len(parts)}: {line!r}")
        title, link, course_name = parts
        items.append(ModuleItem(title=title, link=link, course_name=course_name))
    return items


def parse_selection(line: str) -> str:
    """
    Extract the link from a line returned by the selector.

    The first field (title) is discarded and the second one is the link.
    """
    parts = line.split(SEPARATOR)
    if len(parts) < 2:
        raise SelectionParseError(f"no link in selection {line!r} (was the selection cancelled?)")
    return parts[1]
