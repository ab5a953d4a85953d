"""Displayable list items shared by the interactive views."""

from typing import Protocol


class ListItem(Protocol):
    """Anything the list view can show: task views and journal entries."""

    @property
    def title(self) -> str:
        ...

    @property
    def description(self) -> str:
        ...

    def filter_value(self) -> str:
        """Text used when searching the list."""
        ...
