"""
Observable state for the task board.

NotificationStore keeps an ordered list of listeners and hands each one a
fresh snapshot of the items on every mutation. TaskStore is the single
source of truth for tasks; views only ever see copies.
"""
import copy
import logging
from typing import Callable, Generic, List, Optional, TypeVar

from .schema import Task, TaskStatus, make_task_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[List[T]], None]


class NotificationStore(Generic[T]):
    """Ordered listener registry with synchronous snapshot broadcast."""

    def __init__(self):
        self.listeners: List[Listener] = []

    def add_listener(self, listener_fn: Listener) -> None:
        """Register a listener. Duplicates are kept; there is no removal."""
        self.listeners.append(listener_fn)

    @staticmethod
    def snapshot(items: List[T]) -> List[T]:
        """New list of copied records, detached from the backing sequence."""
        return [copy.copy(item) for item in items]

    def notify(self, items: List[T]) -> None:
        """Call every listener, in registration order, each with its own snapshot."""
        for listener_fn in self.listeners:
            listener_fn(self.snapshot(items))


class TaskStore(NotificationStore[Task]):
    """Owns every task on the board and broadcasts each change."""

    def __init__(self, id_factory: Callable[[], str] = make_task_id):
        super().__init__()
        self._tasks: List[Task] = []
        self._id_factory = id_factory

    def add_task(self, title: str, details: str) -> Task:
        """
        Create an Active task and append it.

        Input is expected to be validated by the caller.
        """
        task = Task(
            id=self._id_factory(),
            title=title,
            details=details,
            status=TaskStatus.ACTIVE,
        )
        self._tasks.append(task)
        logger.info(f"Added task {task.id}: {title!r}")
        self._update_listeners()
        return copy.copy(task)

    def move_task(self, task_id: str, new_status: TaskStatus) -> None:
        """Set a task's status. Unknown ids and unchanged status are silent no-ops."""
        task = next((t for t in self._tasks if t.id == task_id), None)
        if task is None:
            logger.debug(f"move_task: no task {task_id!r}")
            return
        if task.status == new_status:
            logger.debug(f"move_task: {task_id} already {new_status.value}")
            return

        task.status = new_status
        logger.info(f"Moved task {task_id} to {new_status.value}")
        self._update_listeners()

    def tasks(self) -> List[Task]:
        return self.snapshot(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return copy.copy(task)
        return None

    def _update_listeners(self) -> None:
        self.notify(self._tasks)
