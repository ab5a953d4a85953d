"""Functional core - pure business logic with no I/O."""

from .status import Status, status_label, advance, cancel
from .tasks import TaskRecord, TaskView, filter_open, format_timestamp
from .journal import JournalEntry, format_line, parse_line
from .items import ListItem

__all__ = [
    # Status
    "Status",
    "status_label",
    "advance",
    "cancel",
    # Tasks
    "TaskRecord",
    "TaskView",
    "filter_open",
    "format_timestamp",
    # Journal
    "JournalEntry",
    "format_line",
    "parse_line",
    # Items
    "ListItem",
]
