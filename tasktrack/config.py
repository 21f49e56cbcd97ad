"""Settings for task-tracker, read from environment variables.

- TASK_DB_PATH: path of the task file (default: tasks.txt)
- TASK_SKIP_MALFORMED: skip unreadable lines instead of failing the load
- TASK_LOG_LEVEL: console log level name (default: WARNING)

Command-line options take precedence over all of these.
"""

import logging
import os
from pathlib import Path

DEFAULT_DATA_FILE = "tasks.txt"
DEFAULT_LOG_LEVEL = "WARNING"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def default_data_path() -> Path:
    env = os.getenv("TASK_DB_PATH")
    if env:
        return Path(env).expanduser()
    return Path(DEFAULT_DATA_FILE)


def skip_malformed() -> bool:
    return _env_bool("TASK_SKIP_MALFORMED", False)


def log_level() -> int:
    """Resolve TASK_LOG_LEVEL to a logging level, falling back to WARNING."""
    name = os.getenv("TASK_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.WARNING
