"""Adapters - I/O implementations of ports."""

from .monthly_file import MonthlyFileStore
from .file_task_store import FileTaskStore, TaskScan
from .file_journal import FileJournalStore

__all__ = [
    "MonthlyFileStore",
    "FileTaskStore",
    "TaskScan",
    "FileJournalStore",
]
