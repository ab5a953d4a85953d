"""File-based journal storage adapter."""

import logging
import re
from datetime import datetime
from pathlib import Path

from noted.core.journal import JournalEntry, format_line, parse_line

logger = logging.getLogger(__name__)

FILE_PATTERN = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})\.md$")


class FileJournalStore:
    """
    File-based journal storage.

    Implements JournalStore protocol. Each month gets a markdown file with
    one bullet line per entry; files are only ever appended to.
    """

    def __init__(self, journal_dir: Path | str):
        self.journal_dir = Path(journal_dir).expanduser()

    def _path_for_month(self, year: int, month: int) -> Path:
        """Get the file path for a given month."""
        return self.journal_dir / f"{year:04d}-{month:02d}.md"

    def append(self, moment: datetime, message: str) -> None:
        """Append an entry to the journal file for moment's month."""
        path = self._path_for_month(moment.year, moment.month)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(format_line(moment, message))
        logger.info(f"Appended journal entry to {path}")

    def files(self) -> list[Path]:
        """Journal files in chronological order."""
        if not self.journal_dir.is_dir():
            return []
        return sorted(p for p in self.journal_dir.glob("*.md") if FILE_PATTERN.match(p.name))

    def entries(self, oldest_first: bool = False) -> list[JournalEntry]:
        """Read every journal entry. Newest first unless oldest_first is set."""
        entries = []
        for path in self.files():
            match = FILE_PATTERN.match(path.name)
            year, month = int(match.group("year")), int(match.group("month"))
            for number, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
                if not line.strip():
                    continue
                entry = parse_line(line, year, month)
                if entry is None:
                    logger.warning(f"Skipping unreadable journal line {path}:{number}")
                    continue
                entries.append(entry)

        if not oldest_first:
            entries.reverse()
        return entries
