"""Task store interface."""

from datetime import datetime
from typing import Protocol

from noted.core.tasks import TaskView


class TaskStore(Protocol):
    """Interface for creating, listing and updating tasks."""

    def create_task(self, title: str, detail: str = "", due: datetime | None = None) -> TaskView:
        """Create a task in the current month's file."""
        ...

    def list_tasks(self, include_completed: bool = False) -> list[TaskView]:
        """List every task across all monthly files."""
        ...

    def update_task(self, view: TaskView) -> TaskView:
        """Replace the stored record matching view.id inside view.file."""
        ...
