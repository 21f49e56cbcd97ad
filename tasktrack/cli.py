"""Command-line interface for task-tracker.

This module provides the CLI interface for managing tasks using argparse.
It supports the following commands:
- list: List all tasks
- todo / deadline / event: Create a new task of that kind
- mark / unmark: Mark a task as done or not done
- delete: Delete a task
- find: List tasks whose description contains a term
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from tasktrack import config
from tasktrack.logging_setup import setup_logging
from tasktrack.models import Task, TaskMarshalError, parse_local_datetime
from tasktrack.repository import TaskRepository
from tasktrack.storage import FileStorage

logger = logging.getLogger(__name__)


def _parse_datetime(value: str) -> datetime:
    try:
        return parse_local_datetime(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Invalid date-time '{value}'. Use YYYY-MM-DDTHH:MM[:SS]."
        ) from e


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="task",
        description="Personal task tracker with to-dos, deadlines and events"
    )
    parser.add_argument(
        "--file",
        help="Path to the task file (default: TASK_DB_PATH env var or tasks.txt)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list", help="List tasks")

    # Add commands
    todo_parser = subparsers.add_parser("todo", help="Add a to-do")
    todo_parser.add_argument("description", help="Task description")

    deadline_parser = subparsers.add_parser("deadline", help="Add a task with a deadline")
    deadline_parser.add_argument("description", help="Task description")
    deadline_parser.add_argument(
        "--by",
        dest="due",
        type=_parse_datetime,
        required=True,
        help="Due date-time, e.g. 2024-01-01T10:00"
    )

    event_parser = subparsers.add_parser("event", help="Add an event")
    event_parser.add_argument("description", help="Event description")
    event_parser.add_argument(
        "--from",
        dest="start",
        type=_parse_datetime,
        required=True,
        help="Start date-time"
    )
    event_parser.add_argument(
        "--to",
        dest="end",
        type=_parse_datetime,
        required=True,
        help="End date-time"
    )

    mark_parser = subparsers.add_parser("mark", help="Mark a task as done")
    mark_parser.add_argument("number", type=int, help="Task number as shown by 'list'")

    unmark_parser = subparsers.add_parser("unmark", help="Mark a task as not done")
    unmark_parser.add_argument("number", type=int, help="Task number as shown by 'list'")

    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("number", type=int, help="Task number as shown by 'list'")

    find_parser = subparsers.add_parser("find", help="Find tasks by description")
    find_parser.add_argument("term", help="Text to search for")

    return parser


def _report_added(task: Task, repo: TaskRepository) -> int:
    print(f"Task added: {task}")
    print(f"Now you have {repo.count()} task(s).")
    return 0


def _report_not_found(number: int) -> int:
    print(f"Error: Task #{number} not found.", file=sys.stderr)
    return 1


def cmd_list(args: argparse.Namespace, repo: TaskRepository) -> int:
    """Handle the 'list' command.

    Args:
        args: Parsed command-line arguments
        repo: TaskRepository instance

    Returns:
        Exit code (0 for success)
    """
    tasks = repo.get_all_tasks()

    if not tasks.count():
        print("No tasks found.")
        return 0

    print(tasks)
    return 0


def cmd_todo(args: argparse.Namespace, repo: TaskRepository) -> int:
    task = repo.add_todo(args.description)
    return _report_added(task, repo)


def cmd_deadline(args: argparse.Namespace, repo: TaskRepository) -> int:
    task = repo.add_deadline(args.description, args.due)
    return _report_added(task, repo)


def cmd_event(args: argparse.Namespace, repo: TaskRepository) -> int:
    task = repo.add_event(args.description, args.start, args.end)
    return _report_added(task, repo)


def cmd_mark(args: argparse.Namespace, repo: TaskRepository) -> int:
    """Handle the 'mark' command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    task = repo.mark_done(args.number)

    if task is None:
        return _report_not_found(args.number)

    print(f"Marked as done: {task}")
    return 0


def cmd_unmark(args: argparse.Namespace, repo: TaskRepository) -> int:
    """Handle the 'unmark' command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    task = repo.mark_not_done(args.number)

    if task is None:
        return _report_not_found(args.number)

    print(f"Marked as not done: {task}")
    return 0


def cmd_delete(args: argparse.Namespace, repo: TaskRepository) -> int:
    """Handle the 'delete' command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    task = repo.delete_task(args.number)

    if task is None:
        return _report_not_found(args.number)

    print(f"Task deleted: {task}")
    print(f"Now you have {repo.count()} task(s).")
    return 0


def cmd_find(args: argparse.Namespace, repo: TaskRepository) -> int:
    """Handle the 'find' command.

    Returns:
        Exit code (0 for success)
    """
    matches = repo.find(args.term)

    if not matches.count():
        print(f'No task matching "{args.term}" found.')
        return 0

    print(f'Tasks matching "{args.term}":')
    print(matches)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else config.log_level())

    if args.command is None:
        parser.print_help()
        return 1

    storage = FileStorage(args.file, skip_malformed=config.skip_malformed())
    repo = TaskRepository(storage)

    # Dispatch to command handlers
    commands = {
        "list": cmd_list,
        "todo": cmd_todo,
        "deadline": cmd_deadline,
        "event": cmd_event,
        "mark": cmd_mark,
        "unmark": cmd_unmark,
        "delete": cmd_delete,
        "find": cmd_find,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
        return 1

    try:
        return handler(args, repo)
    except (TaskMarshalError, OSError) as e:
        logger.error("Command %r failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
