"""Request service: validation, id minting, ordering and error classification.

The service owns its TaskStore. Transport layers call the three operations
below and render whatever TodoError they raise.
"""

import logging
import secrets
import string
import time
from typing import Callable, Optional

from .errors import DuplicateTaskError, InternalError, InvalidArgumentError, NotFoundError
from .models import Task
from .store import TaskStore

logger = logging.getLogger(__name__)

MIN_TASK_TEXT_LENGTH = 1
MAX_TASK_TEXT_LENGTH = 500

ID_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
ID_LENGTH = 8
MAX_ID_ATTEMPTS = 10


def generate_id(length: int = ID_LENGTH) -> str:
    """Generate a random alphanumeric id from the system CSPRNG."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def validate_task_text(text: str) -> str:
    """Trim task text and check its length.

    Returns:
        The trimmed text.

    Raises:
        InvalidArgumentError: If the trimmed text is empty or too long.
    """
    text = text.strip()
    if len(text) < MIN_TASK_TEXT_LENGTH:
        raise InvalidArgumentError("text empty")
    if len(text) > MAX_TASK_TEXT_LENGTH:
        raise InvalidArgumentError("text too long")
    return text


class TodoService:
    """Create, list and delete tasks held in memory."""

    def __init__(
        self,
        store: Optional[TaskStore] = None,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], float] = time.time,
        max_id_attempts: int = MAX_ID_ATTEMPTS,
    ):
        """Initialize the service.

        Args:
            store: Task store to own. A fresh one is created if omitted.
            id_factory: Returns candidate task ids.
            clock: Returns the current time in seconds since the epoch.
            max_id_attempts: How many candidate ids to try before giving up.
        """
        self.store = store if store is not None else TaskStore()
        self._id_factory = id_factory
        self._clock = clock
        self._max_id_attempts = max_id_attempts

    def add_task(self, text: str) -> Task:
        """Validate text and store it as a new task.

        Args:
            text: Raw task text; surrounding whitespace is removed.

        Returns:
            The created task.

        Raises:
            InvalidArgumentError: If the text is empty or too long.
            InternalError: If no unused id was found.
        """
        text = validate_task_text(text)

        for attempt in range(1, self._max_id_attempts + 1):
            task = Task(id=self._id_factory(), text=text, created_at=int(self._clock()))
            try:
                self.store.insert(task)
            except DuplicateTaskError:
                logger.warning(
                    f"Task id collision on attempt {attempt}/{self._max_id_attempts}: {task.id}"
                )
                continue
            logger.info(f"Task added: id={task.id}")
            return task

        logger.error(f"Unable to allocate unique id after {self._max_id_attempts} attempts")
        raise InternalError("unable to allocate unique id")

    def get_tasks(self) -> list[Task]:
        """Return all tasks, newest first; equal timestamps ordered by id."""
        return sorted(self.store.list(), key=lambda t: (-t.created_at, t.id))

    def delete_task(self, task_id: str) -> bool:
        """Delete a task by id.

        Returns:
            True once the task is removed.

        Raises:
            InvalidArgumentError: If the id is blank.
            NotFoundError: If no task has this id.
        """
        if not task_id.strip():
            raise InvalidArgumentError("invalid id")
        if not self.store.remove(task_id):
            raise NotFoundError("task not found")
        logger.info(f"Task deleted: id={task_id}")
        return True
