"""Task status lifecycle - pure value logic."""

from enum import IntEnum


class Status(IntEnum):
    """Lifecycle of a task. Declaration order drives rotation."""

    TODO = 0
    SCHEDULED = 1
    IN_PROGRESS = 2
    PAUSED = 3
    CANCELLED = 4
    DONE = 5

    @property
    def label(self) -> str:
        return status_label(self)


_LABELS = {
    Status.TODO: "TODO",
    Status.SCHEDULED: "SCHEDULED",
    Status.IN_PROGRESS: "IN-PROGRESS",
    Status.PAUSED: "PAUSE",
    Status.CANCELLED: "CANCELLED",
    Status.DONE: "DONE",
}


def status_label(value: int) -> str:
    """Display label for a status value. Unknown values render as UNK."""
    try:
        return _LABELS[Status(value)]
    except ValueError:
        return "UNK"


def advance(status: Status | int) -> Status:
    """Next status in declaration order, wrapping DONE back to TODO. Unknown values restart at TODO."""
    members = list(Status)
    if status not in members:
        return Status.TODO
    position = members.index(status)
    return members[(position + 1) % len(members)]


def cancel(status: Status | int) -> Status:
    """Cancelling is allowed from any status."""
    return Status.CANCELLED
