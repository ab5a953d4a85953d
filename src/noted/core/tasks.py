"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path

from .status import Status, status_label


def _format_timestamp(value: datetime) -> str:
    return value.isoformat()


def _parse_status(value: object) -> Status | int:
    """Known values become Status; other integers are kept so they render as UNK."""
    number = int(value)
    try:
        return Status(number)
    except ValueError:
        return number


def _parse_timestamp(value: object) -> datetime:
    """Accept ISO strings as well as YAML-native timestamps from hand edits."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise TypeError(f"not a timestamp: {value!r}")


@dataclass
class TaskRecord:
    """A task as persisted inside a monthly file."""

    id: str
    created_at: datetime
    task: str
    detail: str = ""
    status: Status | int = Status.TODO
    due_at: datetime | None = None
    scheduled_for: datetime | None = None

    def to_dict(self) -> dict:
        """Mapping ready for YAML. Absent optional timestamps are omitted."""
        data: dict = {
            "id": self.id,
            "created_at": _format_timestamp(self.created_at),
        }
        if self.due_at is not None:
            data["due_at"] = _format_timestamp(self.due_at)
        if self.scheduled_for is not None:
            data["scheduled_for"] = _format_timestamp(self.scheduled_for)
        data["task"] = self.task
        data["detail"] = self.detail
        data["status"] = int(self.status)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "TaskRecord":
        """
        Build a record from its stored mapping.

        Raises KeyError, TypeError or ValueError on malformed input.
        """
        if not isinstance(data, dict):
            raise TypeError(f"entry is not a mapping: {data!r}")
        task_id = data["id"]
        if not isinstance(task_id, str) or not task_id:
            raise ValueError(f"invalid id: {task_id!r}")
        due = data.get("due_at")
        scheduled = data.get("scheduled_for")
        return cls(
            id=task_id,
            created_at=_parse_timestamp(data["created_at"]),
            task=str(data.get("task") or ""),
            detail=str(data.get("detail") or ""),
            status=_parse_status(data.get("status", Status.TODO)),
            due_at=_parse_timestamp(due) if due is not None else None,
            scheduled_for=_parse_timestamp(scheduled) if scheduled is not None else None,
        )

    def to_view(self, file: Path) -> "TaskView":
        return TaskView(
            id=self.id,
            file=Path(file),
            created_at=self.created_at,
            task=self.task,
            detail=self.detail,
            status=self.status,
            due_at=self.due_at,
            scheduled_for=self.scheduled_for,
        )


@dataclass(frozen=True)
class TaskView:
    """A task as shown by the interactive layer, tagged with its owning file."""

    id: str
    file: Path
    created_at: datetime
    task: str
    detail: str = ""
    status: Status | int = Status.TODO
    due_at: datetime | None = None
    scheduled_for: datetime | None = None

    @property
    def title(self) -> str:
        return self.task

    @property
    def description(self) -> str:
        return f"{status_label(self.status)}: {self.detail}"

    def filter_value(self) -> str:
        return f"{self.task} {self.detail} {int(self.status)}"

    def matches(self, record: TaskRecord) -> bool:
        return self.id == record.id

    def with_status(self, status: Status | int) -> "TaskView":
        return replace(self, status=status)

    def to_record(self) -> TaskRecord:
        return TaskRecord(
            id=self.id,
            created_at=self.created_at,
            task=self.task,
            detail=self.detail,
            status=self.status,
            due_at=self.due_at,
            scheduled_for=self.scheduled_for,
        )


def filter_open(views: list[TaskView]) -> list[TaskView]:
    """Drop finished tasks (done or cancelled)."""
    return [v for v in views if v.status not in (Status.DONE, Status.CANCELLED)]


def format_timestamp(value: datetime | None) -> str:
    """Short human form used by listings and the detail view."""
    if value is None:
        return ""
    if value.time() == datetime.min.time():
        return value.strftime("%Y-%m-%d")
    return value.strftime("%Y-%m-%d %H:%M")
