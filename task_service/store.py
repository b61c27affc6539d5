"""In-memory task storage.

Every operation takes the store lock, so the store can be shared by request
handlers running on different threads without any external locking.
"""

import threading
from uuid import UUID, uuid4

from loguru import logger

from task_service.models import Task, TaskCreate, TaskUpdate

SAMPLE_TASKS = (
    ("Complete the assignment", ""),
    ("Review the code", ""),
)


def _sort_key(task: Task) -> tuple[bool, str]:
    return task.is_completed, task.title


class TaskStore:
    """Thread-safe in-memory task storage."""

    def __init__(self) -> None:
        """Initialize an empty task store."""
        self._tasks: dict[UUID, Task] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def list_all(self) -> list[Task]:
        """Return all tasks, incomplete first, then alphabetically by title."""
        with self._lock:
            snapshot = list(self._tasks.values())
        return sorted(snapshot, key=_sort_key)

    def get(self, task_id: UUID) -> Task | None:
        """Get a task by its ID, or None if not found."""
        with self._lock:
            return self._tasks.get(task_id)

    def add(self, task: Task) -> bool:
        """Insert a fully built task. Returns False if the ID is already taken."""
        with self._lock:
            if task.id in self._tasks:
                logger.warning("Refusing to add task with duplicate id {}", task.id)
                return False
            self._tasks[task.id] = task
        logger.debug("Added task {}", task.id)
        return True

    def create(self, data: TaskCreate) -> Task:
        """Create a new task from a validated request and return it."""
        task = Task(
            id=uuid4(),
            title=data.title,
            description=data.description or "",
            is_completed=False,
        )
        self.add(task)
        return task

    def update(self, task_id: UUID, data: TaskUpdate) -> Task | None:
        """Apply the supplied fields to an existing task. Returns None if not found.

        The lookup and the replacement happen under one lock acquisition, so
        concurrent updates to the same task cannot lose each other's writes
        or interleave field by field.
        """
        changes = data.changes()
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None
            if not changes:
                return task
            # Re-validate so a blank title can never be stored.
            updated_task = Task.model_validate({**task.model_dump(), **changes})
            self._tasks[task_id] = updated_task
        logger.debug("Updated task {} fields={}", task_id, sorted(changes))
        return updated_task

    def delete(self, task_id: UUID) -> bool:
        """Delete a task. Returns True if deleted, False if not found."""
        with self._lock:
            removed = self._tasks.pop(task_id, None)
        return removed is not None

    def clear(self) -> None:
        """Clear all tasks. Useful for testing."""
        with self._lock:
            self._tasks.clear()

    def seed_samples(self) -> list[Task]:
        """Insert the starter tasks a fresh service shows."""
        seeded = [self.create(TaskCreate(title=title, description=description)) for title, description in SAMPLE_TASKS]
        logger.info("Seeded {} sample tasks", len(seeded))
        return seeded
