"""Storage layer for task-tracker.

This module provides an abstract storage interface and a flat-file
implementation. FileStorage writes one marshalled task per line; since a
marshalled task may itself contain line breaks, each line is escaped on the
way out and unescaped on the way in.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from tasktrack import config
from tasktrack.models import Task, TaskMarshalError, unmarshal

logger = logging.getLogger(__name__)

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


def escape_line(s: str) -> str:
    """Escape backslashes and line breaks so ``s`` fits on one line."""
    return "".join(_ESCAPES.get(ch, ch) for ch in s)


def unescape_line(line: str) -> str:
    """Reverse ``escape_line``.

    Raises:
        TaskMarshalError: If the line ends in a lone backslash or contains
            an unknown escape sequence
    """
    out = []
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            if i + 1 >= len(line) or line[i + 1] not in _UNESCAPES:
                raise TaskMarshalError(line)
            out.append(_UNESCAPES[line[i + 1]])
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


class Storage(ABC):
    """Abstract base class for task storage implementations."""

    @abstractmethod
    def save(self, tasks: List[Task]) -> None:
        """Save tasks to storage.

        Args:
            tasks: Tasks in display order
        """
        pass

    @abstractmethod
    def load(self) -> List[Task]:
        """Load tasks from storage.

        Returns:
            Tasks in the order they were saved
        """
        pass


class FileStorage(Storage):
    """Plain text storage, one marshalled task per line.

    Attributes:
        file_path: Path to the task file
        skip_malformed: Log and skip lines that cannot be unmarshalled
            instead of raising TaskMarshalError
    """

    def __init__(self, file_path: Optional[str] = None, skip_malformed: bool = False):
        """Initialize FileStorage with a file path.

        Args:
            file_path: Path to the task file. If None, uses the TASK_DB_PATH
                      environment variable or defaults to tasks.txt
            skip_malformed: Whether load() skips malformed lines
        """
        self.file_path = Path(file_path) if file_path is not None else config.default_data_path()
        self.skip_malformed = skip_malformed

    def save(self, tasks: List[Task]) -> None:
        """Rewrite the task file with the given tasks.

        Args:
            tasks: Tasks in display order
        """
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

        lines = [escape_line(task.marshal()) + "\n" for task in tasks]
        with open(self.file_path, "w", encoding="utf-8", newline="") as f:
            f.writelines(lines)

        logger.debug("Saved %d task(s) to %s", len(tasks), self.file_path)

    def load(self) -> List[Task]:
        """Load tasks from the task file.

        Returns:
            Tasks in file order. Returns an empty list if the file doesn't
            exist. Blank lines are ignored.

        Raises:
            TaskMarshalError: If a line is malformed and skip_malformed is off
        """
        if not self.file_path.exists():
            return []

        with open(self.file_path, "r", encoding="utf-8", newline="") as f:
            content = f.read()

        tasks = []
        # Only "\n" separates records; str.splitlines() would also split on
        # characters such as \x1c or \u2028 that may occur in a description.
        for lineno, line in enumerate(content.split("\n"), start=1):
            # save() never writes a raw CR; one here is a CRLF line ending.
            if line.endswith("\r"):
                line = line[:-1]
            if not line:
                continue
            try:
                tasks.append(unmarshal(unescape_line(line)))
            except TaskMarshalError:
                if not self.skip_malformed:
                    raise
                logger.warning("Skipping malformed line %d in %s: %r", lineno, self.file_path, line)

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.file_path)
        return tasks
