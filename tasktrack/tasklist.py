"""Ordered, in-memory collection of tasks."""

from typing import Callable, Iterable, Iterator, List, Optional

from tasktrack.models import Task


class TaskList:
    """An ordered list of tasks addressed by 0-based index.

    Negative indices are treated as out of range, unlike a plain list.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks is not None else []

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"Task index {index} out of range")

    def add(self, task: Task) -> None:
        self._tasks.append(task)

    def get(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index]

    def remove(self, index: int) -> Task:
        """Remove and return the task at ``index``."""
        self._check_index(index)
        return self._tasks.pop(index)

    def set_done(self, index: int) -> Task:
        task = self.get(index)
        task.set_done()
        return task

    def set_not_done(self, index: int) -> Task:
        task = self.get(index)
        task.set_not_done()
        return task

    def filter(self, predicate: Callable[[Task], bool]) -> "TaskList":
        """Return a new TaskList with the tasks matching ``predicate``, in order.

        The tasks themselves are shared, not copied.
        """
        return TaskList(task for task in self._tasks if predicate(task))

    def count(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __str__(self) -> str:
        return "\n".join(f"{i}. {task}" for i, task in enumerate(self._tasks, start=1))
