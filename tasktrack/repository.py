"""Task repository for managing task operations.

This module provides a high-level TaskRepository class that manages tasks
using the storage layer. Tasks are addressed by their 1-based position in the
list, which is the number shown to the user.
"""

from datetime import datetime
from typing import Optional

from tasktrack.models import Deadline, Event, Task, Todo
from tasktrack.storage import FileStorage, Storage
from tasktrack.tasklist import TaskList


class TaskRepository:
    """Repository for managing tasks with storage backend.

    Every mutating operation loads the full list, changes it, and writes it
    back, so the storage file always reflects the last completed command.

    Attributes:
        storage: Storage backend for persisting tasks
    """

    def __init__(self, storage: Optional[Storage] = None):
        """Initialize TaskRepository with a storage backend.

        Args:
            storage: Storage implementation to use. If None, uses FileStorage
                    with default file path.
        """
        self.storage = storage or FileStorage()

    def _load(self) -> TaskList:
        return TaskList(self.storage.load())

    def _save(self, tasks: TaskList) -> None:
        self.storage.save(list(tasks))

    def _add(self, task: Task) -> Task:
        tasks = self._load()
        tasks.add(task)
        self._save(tasks)
        return task

    def add_todo(self, description: str) -> Task:
        """Create a new todo.

        Args:
            description: What needs doing

        Returns:
            The created Todo
        """
        return self._add(Todo(description))

    def add_deadline(self, description: str, due: datetime) -> Task:
        """Create a new task with a deadline.

        Args:
            description: What needs doing
            due: Local date-time it must be done by

        Returns:
            The created Deadline
        """
        return self._add(Deadline(description, due))

    def add_event(self, description: str, start: datetime, end: datetime) -> Task:
        """Create a new event.

        Args:
            description: What the event is
            start: When it starts
            end: When it ends

        Returns:
            The created Event
        """
        return self._add(Event(description, start, end))

    def get_all_tasks(self) -> TaskList:
        """Get all tasks in display order."""
        return self._load()

    def count(self) -> int:
        return self._load().count()

    def get_task(self, number: int) -> Optional[Task]:
        """Get a specific task by its 1-based number.

        Returns:
            Task object if found, None otherwise
        """
        tasks = self._load()
        try:
            return tasks.get(number - 1)
        except IndexError:
            return None

    def mark_done(self, number: int) -> Optional[Task]:
        """Mark a task as done.

        Args:
            number: 1-based number of the task

        Returns:
            Updated Task object if found, None if task doesn't exist
        """
        tasks = self._load()
        try:
            task = tasks.set_done(number - 1)
        except IndexError:
            return None
        self._save(tasks)
        return task

    def mark_not_done(self, number: int) -> Optional[Task]:
        """Mark a task as not done.

        Args:
            number: 1-based number of the task

        Returns:
            Updated Task object if found, None if task doesn't exist
        """
        tasks = self._load()
        try:
            task = tasks.set_not_done(number - 1)
        except IndexError:
            return None
        self._save(tasks)
        return task

    def delete_task(self, number: int) -> Optional[Task]:
        """Delete a task by its 1-based number.

        Returns:
            The deleted Task, or None if task didn't exist
        """
        tasks = self._load()
        try:
            task = tasks.remove(number - 1)
        except IndexError:
            return None
        self._save(tasks)
        return task

    def find(self, term: str) -> TaskList:
        """Get the tasks whose description contains ``term``."""
        return self._load().filter(lambda task: term in task.description)
