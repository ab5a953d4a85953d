"""Configuration management for noted."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import StorageError

logger = logging.getLogger(__name__)

NOTED_HOME = Path(os.environ.get("NOTED_HOME", Path.home() / ".noted"))
CONFIG_FILE = Path(os.environ.get("NOTED_CONFIG", Path.home() / ".noted.conf"))
LOG_TO_STDERR = "-"


@dataclass
class Config:
    """noted configuration."""

    storage_dir: str = field(default_factory=lambda: str(NOTED_HOME))
    journal_prefix: str = "journal"
    task_prefix: str = "task"
    log_level: str = "WARNING"
    # Empty means <storage_dir>/noted.log
    log_file: str = ""

    @property
    def storage_path(self) -> Path:
        return Path(self.storage_dir).expanduser()

    @property
    def journal_dir(self) -> Path:
        return self.storage_path / self.journal_prefix

    @property
    def task_dir(self) -> Path:
        return self.storage_path / self.task_prefix

    @property
    def log_path(self) -> Path | None:
        """Where log lines go. None means stderr."""
        if self.log_file == LOG_TO_STDERR:
            return None
        if self.log_file:
            return Path(self.log_file).expanduser()
        return self.storage_path / "noted.log"


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from a key = value file. Missing file means defaults."""
    config = Config()
    config_file = Path(path).expanduser() if path else CONFIG_FILE

    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "storage_dir":
                config.storage_dir = value
            case "journal_prefix":
                config.journal_prefix = value
            case "task_prefix":
                config.task_prefix = value
            case "log_level":
                config.log_level = value.upper()
            case "log_file":
                config.log_file = value
            case _:
                logger.warning(f"Ignoring unknown config key '{key}' in {config_file}")

    return config


def ensure_directories(config: Config) -> None:
    """Create the storage, journal and task directories if they are missing."""
    for directory in (config.storage_path, config.journal_dir, config.task_dir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to initialize directory {directory}: {e}")
            raise StorageError(f"cannot create {directory}: {e}") from e
