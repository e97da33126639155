"""Todo Service - in-memory task list with a Connect-style JSON API."""

from .errors import (
    DuplicateTaskError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    TodoError,
)
from .models import Task
from .server import TodoServer, create_app, run_server
from .service import TodoService, generate_id, validate_task_text
from .store import TaskStore

__all__ = [
    "TodoService",
    "TaskStore",
    "Task",
    "TodoServer",
    "create_app",
    "run_server",
    "generate_id",
    "validate_task_text",
    "TodoError",
    "InvalidArgumentError",
    "NotFoundError",
    "InternalError",
    "DuplicateTaskError",
]


def main():
    """Entry point for the todo service."""
    from .__main__ import main as _main

    _main()
