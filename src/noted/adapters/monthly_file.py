"""Monthly task files: one YAML document per (year, month) of creation."""

import logging
import re
from datetime import datetime
from pathlib import Path

import yaml

from noted.core.tasks import TaskRecord
from noted.errors import ParseError

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".yaml"
FILE_PATTERN = re.compile(r"^\d{4}-\d{2}\.yaml$")


class MonthlyFileStore:
    """
    Load/save primitives over the ordered task records of a monthly file.

    Files are named <YYYY>-<MM>.yaml so that name order is chronological.
    Saving always rewrites the whole file.
    """

    def __init__(self, task_dir: Path | str):
        self.task_dir = Path(task_dir).expanduser()

    def path_for(self, year: int, month: int) -> Path:
        """Get the file path for a given month."""
        return self.task_dir / f"{year:04d}-{month:02d}{FILE_SUFFIX}"

    def path_for_datetime(self, moment: datetime) -> Path:
        return self.path_for(moment.year, moment.month)

    def files(self) -> list[Path]:
        """Monthly task files in name order. Anything not named YYYY-MM.yaml is ignored."""
        if not self.task_dir.is_dir():
            return []
        return sorted(
            p for p in self.task_dir.iterdir()
            if p.is_file() and FILE_PATTERN.match(p.name)
        )

    def load(self, path: Path) -> list[TaskRecord]:
        """
        Read the records stored in path.

        A missing file is an empty sequence. Raises ParseError when the
        content is not a task document; OSError propagates.
        """
        path = Path(path)
        if not path.exists():
            return []
        return decode(read_text(path), path)

    def save(self, path: Path, records: list[TaskRecord]) -> None:
        """Serialize every record and overwrite path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(encode(records), encoding="utf-8")
        logger.debug(f"Wrote {len(records)} task(s) to {path}")


def read_text(path: Path) -> str:
    """Read a task file as UTF-8. Undecodable bytes raise ParseError; OSError propagates."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(path, f"not valid UTF-8: {e}") from e


def encode(records: list[TaskRecord]) -> str:
    """Render records as a YAML task document."""
    document = {"entries": [r.to_dict() for r in records]}
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True, default_flow_style=False)


def decode(text: str, path: Path | str = "<string>") -> list[TaskRecord]:
    """Parse a YAML task document. Raises ParseError on malformed content."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(path, str(e)) from e

    if document is None:
        return []
    if not isinstance(document, dict):
        raise ParseError(path, "document is not a mapping")

    entries = document.get("entries")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ParseError(path, "'entries' is not a list")

    records = []
    for position, raw in enumerate(entries):
        try:
            records.append(TaskRecord.from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(path, f"entry {position}: {e}") from e
    return records
