"""File-based task storage adapter."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable

from noted.core.status import Status, advance, cancel
from noted.core.tasks import TaskRecord, TaskView
from noted.errors import NotFoundError, ParseError, StorageError

from .monthly_file import MonthlyFileStore, decode, read_text

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    return datetime.now().astimezone()


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass
class TaskScan:
    """Result of reading every monthly file."""

    views: list[TaskView] = field(default_factory=list)
    failures: list[tuple[Path, Exception]] = field(default_factory=list)


class FileTaskStore:
    """
    File-based task storage.

    Implements TaskStore protocol. Tasks are partitioned into one YAML file
    per creation month; an update rewrites the whole file it lives in.
    """

    def __init__(
        self,
        task_dir: Path | str,
        clock: Callable[[], datetime] = local_now,
        id_factory: Callable[[], str] = new_task_id,
    ):
        self.files = MonthlyFileStore(task_dir)
        self.clock = clock
        self.id_factory = id_factory

    @property
    def task_dir(self) -> Path:
        return self.files.task_dir

    def create_task(self, title: str, detail: str = "", due: datetime | None = None) -> TaskView:
        """Append a new TODO task to this month's file."""
        now = self.clock()
        path = self.files.path_for_datetime(now)

        try:
            records = self.files.load(path)
        except ParseError as e:
            logger.error(f"Failed to parse existing task file {path}: {e}")
            raise StorageError(f"cannot add task to {path}: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read existing task file {path}: {e}")
            raise StorageError(f"cannot read {path}: {e}") from e

        record = TaskRecord(
            id=self.id_factory(),
            created_at=now,
            task=title,
            detail=detail,
            status=Status.TODO,
            due_at=due,
            scheduled_for=None,
        )
        records.append(record)

        try:
            self.files.save(path, records)
        except OSError as e:
            logger.error(f"Failed to write task file {path}: {e}")
            raise StorageError(f"cannot write {path}: {e}") from e

        logger.info(f"Created task {record.id} in {path}")
        return record.to_view(path)

    def scan_tasks(self) -> TaskScan:
        """Read every monthly file, collecting the ones that fail instead of raising."""
        try:
            paths = self.files.files()
        except OSError as e:
            logger.error(f"Failed to read task directory {self.task_dir}: {e}")
            raise StorageError(f"cannot list {self.task_dir}: {e}") from e

        scan = TaskScan()
        for path in paths:
            try:
                records = self.files.load(path)
            except (ParseError, OSError) as e:
                logger.error(f"Skipping task file {path}: {e}")
                scan.failures.append((path, e))
                continue
            scan.views.extend(r.to_view(path) for r in records)
        return scan

    def list_tasks(self, include_completed: bool = False) -> list[TaskView]:
        """
        List every task in file-then-entry order.

        include_completed is accepted for interface compatibility and does
        not filter anything; use core.tasks.filter_open to hide finished tasks.
        """
        return self.scan_tasks().views

    def update_task(self, view: TaskView) -> TaskView:
        """Replace the record with view.id inside view.file and rewrite that file."""
        path = Path(view.file)
        try:
            records = decode(read_text(path), path)
        except OSError as e:
            logger.error(f"Task file not found: {path} ({e})")
            raise NotFoundError(path, view.task) from e
        except ParseError as e:
            logger.error(f"Failed to parse task file {path}: {e}")
            raise

        found = False
        for i, record in enumerate(records):
            if view.matches(record):
                records[i] = view.to_record()
                found = True

        if not found:
            logger.error(f"Failed to locate task {view.id} ({view.task}) in {path}")
            raise NotFoundError(path, view.task)

        self.files.save(path, records)
        logger.info(f"Updated task {view.id} in {path}")
        return view

    def rotate_task(self, view: TaskView) -> TaskView:
        """Advance the task to its next status and persist it."""
        return self.update_task(view.with_status(advance(view.status)))

    def cancel_task(self, view: TaskView) -> TaskView:
        """Mark the task cancelled and persist it."""
        return self.update_task(view.with_status(cancel(view.status)))
