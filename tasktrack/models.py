"""Core models for task-tracker.

This module defines the task hierarchy and its line-oriented serialization:
- Task: Abstract base holding the description and completion flag
- Todo, Deadline, Event: The three concrete task kinds
- TaskType: Enum of the one-character tags used in the persisted format
- TaskMarshalError: Raised when a persisted line cannot be turned back into a task

A marshalled task is a single string: the type tag, a completion flag
("0" or "1"), and then the task's fields. Todo stores its description raw
for the rest of the line; every other field is written with the chonk
encoding from ``tasktrack.chonk``.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Dict, List, Type

from tasktrack.chonk import chonkify, dechonkify


class TaskType(Enum):
    """Type tags written as the first character of a marshalled task."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


class TaskMarshalError(ValueError):
    """A persisted line is not a valid task encoding.

    Attributes:
        line: The offending raw line
    """

    def __init__(self, line: str):
        super().__init__(f"Malformed task encoding: {line!r}")
        self.line = line


def _format_datetime(value: datetime) -> str:
    return value.isoformat()


# Extended ISO-8601 local date-time: date, "T", hours and minutes, optional
# seconds and a 3- or 6-digit fraction. No offset, no basic (compact) form,
# no bare date.
_LOCAL_DATETIME = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}(:[0-9]{2}(\.[0-9]{3}([0-9]{3})?)?)?"
)


def parse_local_datetime(text: str) -> datetime:
    """Parse an ISO-8601 local date-time such as ``2024-01-01T10:00:00``.

    The accepted form is the same on every supported Python version, unlike
    ``datetime.fromisoformat`` on its own.

    Raises:
        ValueError: If ``text`` is not an extended-format local date-time
            or names an impossible date or time
    """
    if not _LOCAL_DATETIME.fullmatch(text):
        raise ValueError(f"Invalid local date-time: {text!r}")
    return datetime.fromisoformat(text)


def _parse_datetime(text: str, line: str) -> datetime:
    try:
        return parse_local_datetime(text)
    except ValueError as e:
        raise TaskMarshalError(line) from e


def _check_naive(name: str, value: datetime) -> None:
    if not isinstance(value, datetime):
        raise TypeError(f"{name} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is not None:
        raise ValueError(f"{name} must be a local date-time without timezone")


def _read_fields(line: str, count: int) -> List[str]:
    """Decode exactly ``count`` chonks following the tag and flag."""
    idx = 2
    fields = []
    for _ in range(count):
        decoded = dechonkify(line, idx)
        if decoded is None:
            raise TaskMarshalError(line)
        value, idx = decoded
        fields.append(value)

    if idx != len(line):
        raise TaskMarshalError(line)
    return fields


@dataclass
class Task(ABC):
    """Abstract task with a description and a completion flag.

    Everything except ``done`` is read-only once the task is constructed.
    Equality compares the concrete type and the field values, never ``done``.

    Attributes:
        description: Free-form text describing the task
        done: Whether the task has been completed
    """

    TYPE: ClassVar[TaskType]

    description: str
    done: bool = field(default=False, init=False, compare=False)

    def __setattr__(self, name, value):
        if name != "done" and name in self.__dict__:
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__setattr__(name, value)

    def set_done(self) -> None:
        """Mark the task as complete."""
        self.done = True

    def set_not_done(self) -> None:
        """Mark the task as incomplete."""
        self.done = False

    def _header(self) -> str:
        return self.TYPE.value + ("1" if self.done else "0")

    def _format(self) -> str:
        return f"[{self.TYPE.value}]" + ("[X] " if self.done else "[ ] ") + self.description

    @abstractmethod
    def __str__(self) -> str:
        """Return the human-readable form of the task."""

    @abstractmethod
    def marshal(self) -> str:
        """Serialize the task to a single string suitable for storing.

        Returns:
            The marshalled task
        """

    @classmethod
    @abstractmethod
    def _parse(cls, line: str) -> "Task":
        """Build a task of this kind from a line whose header is already checked."""

    @classmethod
    def unmarshal(cls, line: str) -> "Task":
        """Deserialize a marshalled task.

        Called on Task itself, this dispatches on the type tag. Called on a
        concrete kind, the tag must match that kind.

        Args:
            line: A string produced by ``marshal()``

        Returns:
            The reconstructed task, with its completion flag restored

        Raises:
            TaskMarshalError: If the line is truncated, carries an unknown tag
                or flag, or any of its fields cannot be decoded
        """
        if len(line) < 2:
            raise TaskMarshalError(line)

        try:
            task_type = TaskType(line[0])
        except ValueError as e:
            raise TaskMarshalError(line) from e

        task_cls = _VARIANTS[task_type]
        if cls is not Task and task_cls is not cls:
            raise TaskMarshalError(line)

        flag = line[1]
        if flag not in ("0", "1"):
            raise TaskMarshalError(line)

        task = task_cls._parse(line)
        if flag == "1":
            task.set_done()
        return task


@dataclass
class Todo(Task):
    """A plain to-do with no date attached."""

    TYPE: ClassVar[TaskType] = TaskType.TODO

    def __str__(self) -> str:
        return self._format()

    def marshal(self) -> str:
        # The description is the last field, so it needs no length prefix.
        return self._header() + self.description

    @classmethod
    def _parse(cls, line: str) -> "Todo":
        return cls(line[2:])


@dataclass
class Deadline(Task):
    """A task that has to be done by a given date-time.

    Attributes:
        due: Local date-time the task is due by
    """

    TYPE: ClassVar[TaskType] = TaskType.DEADLINE

    due: datetime

    def __post_init__(self):
        _check_naive("due", self.due)

    def __str__(self) -> str:
        return f"{self._format()} (by: {_format_datetime(self.due)})"

    def marshal(self) -> str:
        return (
            self._header()
            + chonkify(self.description)
            + chonkify(_format_datetime(self.due))
        )

    @classmethod
    def _parse(cls, line: str) -> "Deadline":
        description, due = _read_fields(line, 2)
        return cls(description, _parse_datetime(due, line))


@dataclass
class Event(Task):
    """A task spanning an interval of time.

    The end is not required to come after the start.

    Attributes:
        start: Local date-time the event starts
        end: Local date-time the event ends
    """

    TYPE: ClassVar[TaskType] = TaskType.EVENT

    start: datetime
    end: datetime

    def __post_init__(self):
        _check_naive("start", self.start)
        _check_naive("end", self.end)

    def __str__(self) -> str:
        return (
            f"{self._format()} "
            f"(from: {_format_datetime(self.start)} to: {_format_datetime(self.end)})"
        )

    def marshal(self) -> str:
        return (
            self._header()
            + chonkify(self.description)
            + chonkify(_format_datetime(self.start))
            + chonkify(_format_datetime(self.end))
        )

    @classmethod
    def _parse(cls, line: str) -> "Event":
        description, start, end = _read_fields(line, 3)
        return cls(description, _parse_datetime(start, line), _parse_datetime(end, line))


_VARIANTS: Dict[TaskType, Type[Task]] = {
    TaskType.TODO: Todo,
    TaskType.DEADLINE: Deadline,
    TaskType.EVENT: Event,
}

unmarshal = Task.unmarshal
