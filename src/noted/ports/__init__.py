"""Ports - interfaces/protocols for external dependencies."""

from .task_store import TaskStore
from .journal_store import JournalStore

__all__ = [
    "TaskStore",
    "JournalStore",
]
