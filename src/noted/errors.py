"""Errors raised at the storage boundary."""

from pathlib import Path


class NotedError(Exception):
    """Base class for noted errors."""

    pass


class StorageError(NotedError):
    """Raised when a directory or file cannot be created, read or written."""

    pass


class ParseError(NotedError):
    """Raised when a stored file does not decode into task entries."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"cannot parse {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotFoundError(NotedError):
    """
    Raised when an update target cannot be found.

    Covers both an unreadable task file and a file with no matching id.
    """

    def __init__(self, file: Path | str, task: str):
        self.file = Path(file)
        self.task = task
        super().__init__(f"{self.file}:{self.task}")
