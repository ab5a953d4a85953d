"""Journal entry formatting and parsing - no I/O."""

import re
from dataclasses import dataclass
from datetime import datetime

LINE_PATTERN = re.compile(r"^- (?P<weekday>[A-Za-z]+) (?P<day>\d{1,2}): ?(?P<message>.*)$")


@dataclass
class JournalEntry:
    """One line of a monthly journal file."""

    year: int
    month: int
    day: int
    message: str

    @property
    def title(self) -> str:
        return self.message

    @property
    def description(self) -> str:
        return f"{self.year:04d}/{self.month:02d}/{self.day:02d}"

    def filter_value(self) -> str:
        return self.message


def format_line(moment: datetime, message: str) -> str:
    """Render a journal line, e.g. '- Monday 3: shipped the release'."""
    flat = " ".join(message.splitlines()).strip()
    return f"- {moment.strftime('%A')} {moment.day}: {flat}\n"


def parse_line(line: str, year: int, month: int) -> JournalEntry | None:
    """Parse a journal line. Returns None if it is not an entry line."""
    match = LINE_PATTERN.match(line.rstrip("\n"))
    if not match:
        return None
    return JournalEntry(
        year=year,
        month=month,
        day=int(match.group("day")),
        message=match.group("message"),
    )
