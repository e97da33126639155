"""In-memory task store guarded by a read-write lock."""

import logging
import threading
from contextlib import contextmanager

from .errors import DuplicateTaskError
from .models import Task

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer.

    A waiting writer blocks new readers, so a steady stream of reads
    cannot starve writes.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self):
        """Hold the lock in shared mode for the duration of the block."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self):
        """Hold the lock exclusively for the duration of the block."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class TaskStore:
    """Thread-safe mapping of task id to Task.

    Each store is an independent instance; the service that owns it is
    the only path to read or mutate it.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}
        self._lock = ReadWriteLock()

    def insert(self, task: Task) -> None:
        """Add a task keyed by its id.

        Raises:
            DuplicateTaskError: If the id is already present.
        """
        with self._lock.write_locked():
            if task.id in self._tasks:
                raise DuplicateTaskError(task.id)
            self._tasks[task.id] = task

    def list(self) -> list[Task]:
        """Return a snapshot of all tasks in no particular order."""
        with self._lock.read_locked():
            return list(self._tasks.values())

    def remove(self, task_id: str) -> bool:
        """Delete a task.

        Returns:
            True if an entry existed and was removed, False otherwise.
        """
        with self._lock.write_locked():
            return self._tasks.pop(task_id, None) is not None

    def clear(self) -> None:
        with self._lock.write_locked():
            count = len(self._tasks)
            self._tasks.clear()
        logger.debug(f"Cleared {count} tasks")

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock.read_locked():
            return task_id in self._tasks
