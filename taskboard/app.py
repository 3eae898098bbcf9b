"""
Board composition root.

Builds exactly one TaskStore and hands it to every view. Construction order
matters: the input form is attached at the start of the app element, then the
Active and Finished columns are appended, so their listeners fire in that
order on every change.
"""
import logging
from typing import Dict, List, Optional

from markupsafe import Markup

from .components import TaskInput, TaskList
from .config import BoardConfig
from .dnd import DataTransfer, DragEvent
from .render import Event, RenderError, RenderHost
from .schema import Task, TaskStatus
from .state import TaskStore

logger = logging.getLogger(__name__)


class TaskBoard:
    """One running board: render host, store and the three views."""

    def __init__(self, config: Optional[BoardConfig] = None,
                 store: Optional[TaskStore] = None):
        self.config = config or BoardConfig()
        self.host = RenderHost("app")
        self.store = store if store is not None else TaskStore()
        self.alerts: List[str] = []

        self.task_input = TaskInput(
            self.host,
            self.store,
            alert=self._alert,
            title_max_length=self.config.title_max_length,
            details_max_length=self.config.details_max_length,
        )
        self.columns: Dict[TaskStatus, TaskList] = {
            status: TaskList(self.host, self.store, status)
            for status in (TaskStatus.ACTIVE, TaskStatus.FINISHED)
        }

    def _alert(self, message: str) -> None:
        logger.warning(f"Rejected input: {message}")
        self.alerts.append(message)

    def column(self, status: TaskStatus) -> TaskList:
        return self.columns[status]

    def submit_task(self, title: str, details: str = "") -> Optional[Task]:
        """Submit the input form. Returns the new task, or None if validation failed."""
        event = self.task_input.submit(title, details)
        return event.detail.get("task")

    def dispatch(self, element_id: str, event_type: str,
                 event: Optional[Event] = None) -> Event:
        """
        Fire an event at the element with the given id and let it bubble.

        Raises:
            RenderError if no such element is attached.
        """
        element = self.host.get_element_by_id(element_id)
        if element is None:
            raise RenderError(f"Element not found: {element_id}")
        if event is None:
            is_drag = event_type.startswith("drag") or event_type == "drop"
            event = DragEvent(event_type, DataTransfer()) if is_drag else Event(event_type)
        event.type = event_type
        return element.dispatch_event(event)

    def to_html(self) -> Markup:
        return self.host.to_html()

    def to_dict(self) -> dict:
        tasks = self.store.tasks()
        columns = {
            status.value: [t.to_dict() for t in col.assigned_tasks]
            for status, col in self.columns.items()
        }
        return {
            "tasks": [t.to_dict() for t in tasks],
            "columns": columns,
            "stats": {
                "total": len(tasks),
                **{status: len(items) for status, items in columns.items()},
            },
        }
