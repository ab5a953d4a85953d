"""Journal storage interface."""

from datetime import datetime
from typing import Protocol

from noted.core.journal import JournalEntry


class JournalStore(Protocol):
    """Interface for appending and reading journal entries."""

    def append(self, moment: datetime, message: str) -> None:
        """Append an entry to the journal file for moment's month."""
        ...

    def entries(self, oldest_first: bool = False) -> list[JournalEntry]:
        """Read every journal entry."""
        ...
