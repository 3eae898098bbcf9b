"""
Board views.

Every view implements the Component capability (configure + render_content)
and gets its element tree from the RenderHost rather than building one:

    TaskInput  - form at the top of the board; validates and adds tasks
    TaskList   - one column; store listener and drop target
    TaskItem   - one task inside a column; drag source

Handlers are bound methods registered on elements in configure(), so they
keep their owning view when an event source calls them.
"""
import logging
from typing import Callable, List, Optional, Protocol, Tuple

from .dnd import (
    EFFECT_MOVE,
    TASK_ID_MIME,
    DragEvent,
    DragSource,
    DropTarget,
    accepts_task_payload,
)
from .render import Element, Event, RenderHost
from .schema import Task, TaskStatus
from .state import TaskStore
from .validation import Validatable, validate

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input, please try again!"
DROPPABLE_CLASS = "droppable"


class Component(Protocol):
    element: Element

    def configure(self) -> None: ...

    def render_content(self) -> None: ...


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TaskItem — drag source
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TaskItem(Component, DragSource):
    def __init__(self, host: RenderHost, host_id: str, task: Task):
        self.task = task
        self.element = host.instantiate("single-task", host_id, False, task.id)
        self.configure()
        self.render_content()

    def drag_start_handler(self, event: DragEvent) -> None:
        event.data_transfer.set_data(TASK_ID_MIME, self.task.id)
        event.data_transfer.effect_allowed = EFFECT_MOVE

    def drag_end_handler(self, event: DragEvent) -> None:
        logger.debug(f"DragEnd {self.task.id}")

    def configure(self) -> None:
        self.element.add_event_listener("dragstart", self.drag_start_handler)
        self.element.add_event_listener("dragend", self.drag_end_handler)

    def render_content(self) -> None:
        self.element.query_selector("h2").text_content = self.task.title
        self.element.query_selector("p").text_content = self.task.details


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TaskList — column view and drop target
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TaskList(Component, DropTarget):
    """
    One board column.

    Every store notification replaces assigned_tasks with the tasks in this
    column's status and rebuilds all child items from scratch.
    """

    def __init__(self, host: RenderHost, store: TaskStore, status: TaskStatus,
                 host_id: str = "app"):
        self.host = host
        self.store = store
        self.type = status
        self.assigned_tasks: List[Task] = []
        self.items: List[TaskItem] = []
        self.render_count = 0
        self.element = host.instantiate("task-list", host_id, False, f"{status.value}-tasks")
        self.configure()
        self.render_content()

    @property
    def list_id(self) -> str:
        return f"{self.type.value}-tasks-list"

    @property
    def list_element(self) -> Element:
        return self.element.query_selector("ul")

    @property
    def droppable(self) -> bool:
        return DROPPABLE_CLASS in self.list_element.class_list

    def drag_over_handler(self, event: DragEvent) -> None:
        if accepts_task_payload(event):
            event.prevent_default()
            self.list_element.class_list.add(DROPPABLE_CLASS)

    def drop_handler(self, event: DragEvent) -> None:
        self.list_element.class_list.remove(DROPPABLE_CLASS)
        if not accepts_task_payload(event):
            return
        task_id = event.data_transfer.get_data(TASK_ID_MIME)
        if task_id:
            self.store.move_task(task_id, self.type)

    def drag_leave_handler(self, event: DragEvent) -> None:
        self.list_element.class_list.remove(DROPPABLE_CLASS)

    def configure(self) -> None:
        self.element.add_event_listener("dragover", self.drag_over_handler)
        self.element.add_event_listener("dragleave", self.drag_leave_handler)
        self.element.add_event_listener("drop", self.drop_handler)
        self.store.add_listener(self._on_tasks_changed)

    def _on_tasks_changed(self, tasks: List[Task]) -> None:
        self.assigned_tasks = [task for task in tasks if task.status == self.type]
        self.render_tasks()

    def render_content(self) -> None:
        self.list_element.id = self.list_id
        self.element.query_selector("h2").text_content = f"{self.type.value.upper()} TASKS"

    def render_tasks(self) -> None:
        self.list_element.clear()
        self.items = [TaskItem(self.host, self.list_id, task) for task in self.assigned_tasks]
        self.render_count += 1


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TaskInput — new-task form
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def _log_alert(message: str) -> None:
    logger.warning(message)


class TaskInput(Component):
    """
    Form that validates user input and adds a task.

    On a failed submit the alert callback receives a blocking message and
    nothing is added.
    """

    def __init__(self, host: RenderHost, store: TaskStore,
                 alert: Callable[[str], None] = _log_alert,
                 title_max_length: Optional[int] = None,
                 details_max_length: Optional[int] = None):
        self.store = store
        self.alert = alert
        self.title_max_length = title_max_length
        self.details_max_length = details_max_length
        self.element = host.instantiate("task-input", "app", True)
        self.title_input_element = self.element.query_selector("#title")
        self.details_input_element = self.element.query_selector("#details")
        self.configure()

    def configure(self) -> None:
        self.element.add_event_listener("submit", self.submit_handler)

    def render_content(self) -> None:
        pass

    def gather_user_input(self) -> Optional[Tuple[str, str]]:
        entered_title = self.title_input_element.value
        entered_details = self.details_input_element.value

        title_validatable = Validatable(
            value=entered_title,
            required=True,
            max_length=self.title_max_length,
        )
        details_validatable = Validatable(
            value=entered_details,
            required=False,
            max_length=self.details_max_length,
        )

        if not validate(title_validatable) or not validate(details_validatable):
            self.alert(INVALID_INPUT_MESSAGE)
            return None
        return entered_title, entered_details

    def clear_inputs(self) -> None:
        self.title_input_element.value = ""
        self.details_input_element.value = ""

    def submit_handler(self, event: Event) -> None:
        event.prevent_default()
        user_input = self.gather_user_input()
        if user_input is None:
            event.detail["error"] = INVALID_INPUT_MESSAGE
            return
        title, details = user_input
        event.detail["task"] = self.store.add_task(title, details)
        self.clear_inputs()

    def submit(self, title: str, details: str = "") -> Event:
        """Fill in the form and submit it, as a user would."""
        self.title_input_element.value = title
        self.details_input_element.value = details
        return self.element.dispatch_event(Event("submit"))
