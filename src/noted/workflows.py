"""Shared workflow layer between the CLI and the interactive views."""

import logging
from datetime import datetime

from .adapters.file_journal import FileJournalStore
from .adapters.file_task_store import FileTaskStore
from .config import Config
from .core.tasks import TaskView, filter_open

logger = logging.getLogger(__name__)


def get_journal(config: Config) -> FileJournalStore:
    """Resolve journal directory from config."""
    return FileJournalStore(config.journal_dir)


def get_task_store(config: Config) -> FileTaskStore:
    """Resolve task directory from config."""
    return FileTaskStore(config.task_dir)


def add_journal_entry(config: Config, message: str, moment: datetime | None = None) -> None:
    """Append a journal entry stamped with moment (now by default)."""
    get_journal(config).append(moment or datetime.now(), message)


def load_tasks(store: FileTaskStore, hide_done: bool = False) -> tuple[list[TaskView], list[str]]:
    """
    Load tasks for display.

    Returns the views and one warning per task file that could not be read.
    """
    scan = store.scan_tasks()
    views = scan.views
    if hide_done:
        views = filter_open(views)
    warnings = [f"skipped {path.name}: {error}" for path, error in scan.failures]
    logger.debug(f"Loaded {len(views)} task(s), {len(warnings)} file(s) skipped")
    return views, warnings
