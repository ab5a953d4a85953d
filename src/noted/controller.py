"""
List/detail controller for the interactive views.

The controller knows nothing about the terminal. A shell feeds it one event
at a time through update() and draws whatever view() returns. Effects tell
the shell what to do next (quit, or clear the status line later).
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Iterable

from .core.items import ListItem
from .core.journal import JournalEntry
from .core.status import advance, cancel, status_label
from .core.tasks import TaskView, format_timestamp
from .errors import NotedError
from .ports.task_store import TaskStore

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 2.0


class Mode(Enum):
    LIST = "list"
    DETAIL = "detail"


# ============== Events ==============


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class WindowResized:
    width: int
    height: int


@dataclass(frozen=True)
class StatusExpired:
    generation: int


# ============== Effects ==============


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class ClearStatusLater:
    delay: float
    generation: int


@dataclass
class Field:
    """One line of the detail view. Editable fields double as edit buffers."""

    name: str
    label: str
    value: str
    editable: bool = False
    original: str = ""

    @property
    def changed(self) -> bool:
        return self.value != self.original


def _field(name: str, label: str, value: str, editable: bool = False) -> Field:
    return Field(name=name, label=label, value=value, editable=editable, original=value)


def _parse_date(text: str) -> datetime | None:
    text = text.strip()
    if not text:
        return None
    return datetime.fromisoformat(text)


class ListController:
    """
    State machine over a list of tasks or journal entries.

    LIST mode browses the collection; enter opens DETAIL mode for the
    selected item, esc returns. Status changes (s, x) and detail edits go
    through the task store synchronously; on failure the list is left as it was.
    """

    def __init__(self, items: Iterable[ListItem], store: TaskStore | None = None, title: str = "Tasks"):
        self.items: list[ListItem] = list(items)
        self.store = store
        self.title = title
        self.index = 0
        self.mode = Mode.LIST
        self.fields: list[Field] = []
        self.focus = 0
        self.status_message = ""
        self.width = 80
        self.height = 24
        self._status_generation = 0

    @property
    def selected(self) -> ListItem | None:
        if not self.items:
            return None
        return self.items[self.index]

    @property
    def editable(self) -> list[int]:
        """Positions of editable fields in the detail view."""
        return [i for i, f in enumerate(self.fields) if f.editable]

    # ============== Hooks ==============

    def init(self) -> list:
        return []

    def update(self, event) -> list:
        """Handle one event and return the effects the shell should run."""
        if isinstance(event, WindowResized):
            self.width, self.height = event.width, event.height
            return []
        if isinstance(event, StatusExpired):
            if event.generation == self._status_generation:
                self.status_message = ""
            return []
        if isinstance(event, KeyPress):
            if event.key == "ctrl+c":
                return [Quit()]
            if self.mode is Mode.LIST:
                return self._update_list(event.key)
            return self._update_detail(event.key)
        return []

    def view(self) -> str:
        if self.mode is Mode.DETAIL:
            lines = self._render_detail()
        else:
            lines = self._render_list()
        return "\n".join(self._clip(line) for line in lines)

    # ============== List mode ==============

    def _update_list(self, key: str) -> list:
        match key:
            case "q":
                return [Quit()]
            case "up" | "k":
                self._move(-1)
            case "down" | "j":
                self._move(1)
            case "pageup":
                self._move(-self._page_size())
            case "pagedown":
                self._move(self._page_size())
            case "home" | "g":
                self.index = 0
            case "end" | "G":
                self.index = max(len(self.items) - 1, 0)
            case "enter":
                self._open_detail()
            case "s":
                view = self._selected_task()
                if view is not None:
                    updated = view.with_status(advance(view.status))
                    return self._save(updated, f"task updated to {status_label(updated.status)}")
            case "x" | "backspace":
                view = self._selected_task()
                if view is not None:
                    return self._save(view.with_status(cancel(view.status)), "task cancelled")
        return []

    def _move(self, delta: int) -> None:
        if not self.items:
            return
        self.index = min(max(self.index + delta, 0), len(self.items) - 1)

    def _selected_task(self) -> TaskView | None:
        item = self.selected
        if self.store is None or not isinstance(item, TaskView):
            return None
        return item

    def _save(self, view: TaskView, message: str) -> list:
        try:
            updated = self.store.update_task(view)
        except (NotedError, OSError) as e:
            logger.error(f"Failed to update task item {view.id}: {e}")
            return self._flash(f"update failed: {e}")
        self.items[self.index] = updated
        return self._flash(message)

    def _flash(self, message: str) -> list:
        self._status_generation += 1
        self.status_message = message
        return [ClearStatusLater(STATUS_MESSAGE_SECONDS, self._status_generation)]

    # ============== Detail mode ==============

    def _open_detail(self) -> None:
        item = self.selected
        if item is None:
            return
        if isinstance(item, TaskView):
            editable = self.store is not None
            self.fields = [
                _field("task", "Task", item.task, editable),
                _field("detail", "Detail", item.detail, editable),
                _field("status", "Status", status_label(item.status)),
                _field("scheduled_for", "Scheduled for", format_timestamp(item.scheduled_for), editable),
                _field("due_at", "Due at", format_timestamp(item.due_at), editable),
            ]
        elif isinstance(item, JournalEntry):
            self.fields = [
                _field("message", "Entry", item.message),
                _field("date", "Date", item.description),
            ]
        else:
            self.fields = [
                _field("title", "Title", item.title),
                _field("description", "Description", item.description),
            ]
        positions = self.editable
        self.focus = positions[0] if positions else 0
        self.mode = Mode.DETAIL

    def _close_detail(self) -> None:
        self.fields = []
        self.focus = 0
        self.mode = Mode.LIST

    def _update_detail(self, key: str) -> list:
        positions = self.editable
        match key:
            case "esc":
                self._close_detail()
            case "enter":
                if positions:
                    return self._commit()
                self._close_detail()
            case "tab" | "down":
                self._cycle_focus(positions, 1)
            case "shift+tab" | "up":
                self._cycle_focus(positions, -1)
            case "backspace":
                if self.focus in positions:
                    field = self.fields[self.focus]
                    field.value = field.value[:-1]
            case _:
                if self.focus in positions and len(key) == 1 and key.isprintable():
                    self.fields[self.focus].value += key
        return []

    def _cycle_focus(self, positions: list[int], step: int) -> None:
        if not positions:
            return
        current = positions.index(self.focus) if self.focus in positions else 0
        self.focus = positions[(current + step) % len(positions)]

    def _commit(self) -> list:
        view = self._selected_task()
        if view is None:
            self._close_detail()
            return []

        fields = {f.name: f for f in self.fields}
        changes: dict = {}
        for name in ("task", "detail"):
            if fields[name].changed:
                changes[name] = fields[name].value
        for name in ("scheduled_for", "due_at"):
            if not fields[name].changed:
                continue
            try:
                changes[name] = _parse_date(fields[name].value)
            except ValueError:
                return self._flash(f"invalid date for {fields[name].label.lower()}: {fields[name].value!r}")

        if not changes:
            self._close_detail()
            return self._flash("no changes")

        edited = replace(view, **changes)
        try:
            updated = self.store.update_task(edited)
        except (NotedError, OSError) as e:
            logger.error(f"Failed to save task item {view.id}: {e}")
            return self._flash(f"save failed: {e}")

        self.items[self.index] = updated
        self._close_detail()
        return self._flash("task saved")

    # ============== Rendering ==============

    def _page_size(self) -> int:
        # title, blank line, blank line, status line, help line
        rows = max(self.height - 5, 2)
        return max(rows // 2, 1)

    def _clip(self, line: str) -> str:
        if self.width > 0 and len(line) > self.width:
            return line[: max(self.width - 1, 0)] + "…"
        return line

    def _render_list(self) -> list[str]:
        lines = [self.title, ""]
        if not self.items:
            lines.append("  No items.")
        else:
            per_page = self._page_size()
            start = (self.index // per_page) * per_page
            for offset, item in enumerate(self.items[start : start + per_page]):
                position = start + offset
                marker = ">" if position == self.index else " "
                lines.append(f"{marker} {item.title}")
                lines.append(f"    {item.description}")
            pages = (len(self.items) + per_page - 1) // per_page
            if pages > 1:
                lines.append(f"  page {start // per_page + 1}/{pages}")
        lines.append("")
        lines.append(self.status_message)
        if self.store is not None:
            lines.append("↑/k up • ↓/j down • enter open • s status • x cancel • q quit")
        else:
            lines.append("↑/k up • ↓/j down • enter open • q quit")
        return lines

    def _render_detail(self) -> list[str]:
        lines = [f"{self.title} › detail", ""]
        width = max(len(f.label) for f in self.fields) + 1 if self.fields else 0
        positions = self.editable
        for i, field in enumerate(self.fields):
            focused = i == self.focus and i in positions
            marker = ">" if focused else " "
            cursor = "_" if focused else ""
            lines.append(f"{marker} {field.label + ':':<{width}} {field.value}{cursor}")
        lines.append("")
        lines.append(self.status_message)
        if positions:
            lines.append("tab next field • enter save • esc back • ctrl+c quit")
        else:
            lines.append("enter/esc back • ctrl+c quit")
        return lines
