"""
Tests for the board views: input form, column views, task items.
"""
import pytest

from taskboard.app import TaskBoard
from taskboard.components import INVALID_INPUT_MESSAGE
from taskboard.config import BoardConfig
from taskboard.dnd import TASK_ID_MIME, DataTransfer, DragEvent
from taskboard.render import RenderError
from taskboard.schema import TaskStatus


def _rendered_items(column):
    return [
        (li.id, li.query_selector("h2").text_content, li.query_selector("p").text_content)
        for li in column.list_element.children
    ]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Layout
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_board_layout(board):
    """Form first, then the Active and Finished columns"""
    children = board.host.root.children
    assert [c.tag for c in children] == ["form", "section", "section"]
    assert [c.id for c in children[1:]] == ["active-tasks", "finished-tasks"]

    active = board.column(TaskStatus.ACTIVE)
    assert active.element.query_selector("h2").text_content == "ACTIVE TASKS"
    assert active.list_element.id == "active-tasks-list"
    assert board.column(TaskStatus.FINISHED).element.query_selector("h2").text_content == "FINISHED TASKS"


def test_columns_start_empty(board):
    for column in board.columns.values():
        assert column.assigned_tasks == []
        assert column.list_element.children == []
        assert column.render_count == 0


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Scenarios
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_added_task_appears_only_in_active(board):
    """Buy milk lands in the Active column with title and body rendered"""
    task = board.store.add_task("Buy milk", "2 liters")
    active = board.column(TaskStatus.ACTIVE)
    finished = board.column(TaskStatus.FINISHED)

    assert task.status == TaskStatus.ACTIVE
    assert _rendered_items(active) == [(task.id, "Buy milk", "2 liters")]
    assert _rendered_items(finished) == []


def test_move_switches_columns_in_one_cycle(board):
    """Both columns re-render exactly once for a single move"""
    task = board.store.add_task("Buy milk", "2 liters")
    active = board.column(TaskStatus.ACTIVE)
    finished = board.column(TaskStatus.FINISHED)
    before = (active.render_count, finished.render_count)

    board.store.move_task(task.id, TaskStatus.FINISHED)

    assert (active.render_count, finished.render_count) == (before[0] + 1, before[1] + 1)
    assert _rendered_items(active) == []
    assert _rendered_items(finished) == [(task.id, "Buy milk", "2 liters")]


def test_partition_invariant(board):
    """Every task is in exactly one column and the columns cover the store"""
    tasks = [board.store.add_task(f"Task {i}", "") for i in range(6)]
    for task in tasks[::2]:
        board.store.move_task(task.id, TaskStatus.FINISHED)
    board.store.move_task(tasks[0].id, TaskStatus.ACTIVE)

    active_ids = {t.id for t in board.column(TaskStatus.ACTIVE).assigned_tasks}
    finished_ids = {t.id for t in board.column(TaskStatus.FINISHED).assigned_tasks}
    store_ids = {t.id for t in board.store.tasks()}

    assert active_ids.isdisjoint(finished_ids)
    assert active_ids | finished_ids == store_ids


def test_column_keeps_store_order(board):
    a = board.store.add_task("A", "")
    b = board.store.add_task("B", "")
    c = board.store.add_task("C", "")
    board.store.move_task(c.id, TaskStatus.FINISHED)
    board.store.move_task(a.id, TaskStatus.FINISHED)

    finished = board.column(TaskStatus.FINISHED)
    assert [t.id for t in finished.assigned_tasks] == [a.id, c.id]
    assert [li.id for li in finished.list_element.children] == [a.id, c.id]
    assert [t.id for t in board.column(TaskStatus.ACTIVE).assigned_tasks] == [b.id]


def test_full_rebuild_replaces_items(board):
    """Every notification throws away the previous item elements"""
    board.store.add_task("A", "")
    active = board.column(TaskStatus.ACTIVE)
    old_element = active.list_element.children[0]
    old_element.class_list.add("selected")

    board.store.add_task("B", "")

    new_first = active.list_element.children[0]
    assert new_first is not old_element
    assert old_element.parent is None
    assert "selected" not in new_first.class_list


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Drop target handlers
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_dispatch_drop_moves_task(board):
    task = board.store.add_task("Buy milk", "")
    dt = DataTransfer()
    dt.set_data(TASK_ID_MIME, task.id)

    over = board.dispatch("finished-tasks", "dragover", DragEvent("dragover", dt))
    assert over.default_prevented
    assert board.column(TaskStatus.FINISHED).droppable

    board.dispatch("finished-tasks", "drop", DragEvent("drop", dt))
    assert board.store.get(task.id).status == TaskStatus.FINISHED
    assert not board.column(TaskStatus.FINISHED).droppable


def test_drop_with_unknown_id_is_noop(board):
    board.store.add_task("Buy milk", "")
    finished = board.column(TaskStatus.FINISHED)
    renders = finished.render_count
    dt = DataTransfer()
    dt.set_data(TASK_ID_MIME, "not-a-task")

    board.dispatch("finished-tasks", "drop", DragEvent("drop", dt))
    assert finished.render_count == renders


def test_drop_with_foreign_type_is_ignored(board):
    task = board.store.add_task("Buy milk", "")
    dt = DataTransfer()
    dt.set_data("text/html", task.id)

    over = board.dispatch("finished-tasks", "dragover", DragEvent("dragover", dt))
    assert not over.default_prevented
    board.dispatch("finished-tasks", "drop", DragEvent("drop", dt))
    assert board.store.get(task.id).status == TaskStatus.ACTIVE


def test_dragleave_clears_signal(board):
    finished = board.column(TaskStatus.FINISHED)
    finished.list_element.class_list.add("droppable")
    board.dispatch("finished-tasks", "dragleave")
    assert not finished.droppable


def test_dispatch_unknown_element(board):
    with pytest.raises(RenderError):
        board.dispatch("missing", "drop")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Input form
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_submit_adds_task_and_clears_inputs(board):
    task = board.submit_task("Buy milk", "2 liters")

    assert task is not None
    assert board.store.get(task.id).title == "Buy milk"
    assert board.task_input.title_input_element.value == ""
    assert board.task_input.details_input_element.value == ""
    assert board.alerts == []


def test_submit_event_default_prevented(board):
    event = board.task_input.submit("Buy milk")
    assert event.default_prevented
    assert "task" in event.detail


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_blank_title_rejected(board, title):
    """Blank titles alert the user and add nothing"""
    assert board.submit_task(title, "details") is None
    assert board.alerts == [INVALID_INPUT_MESSAGE]
    assert board.store.tasks() == []
    # Inputs are left for the user to fix
    assert board.task_input.details_input_element.value == "details"


def test_empty_details_allowed(board):
    assert board.submit_task("Buy milk", "") is not None


def test_length_limits_from_config():
    board = TaskBoard(BoardConfig(title_max_length=5, details_max_length=3))
    assert board.submit_task("Too long title", "") is None
    assert board.submit_task("Short", "long details") is None
    assert board.submit_task("Short", "ok") is not None


def test_board_html(board):
    board.submit_task("Buy <milk>", "2 liters")
    html = str(board.to_html())
    assert 'id="active-tasks-list"' in html
    assert "Buy &lt;milk&gt;" in html
    assert 'draggable="true"' in html


def test_views_declare_their_capabilities(board):
    from taskboard.components import Component, TaskInput, TaskItem, TaskList
    from taskboard.dnd import DragSource, DropTarget

    assert DropTarget in TaskList.__mro__ and Component in TaskList.__mro__
    assert DragSource in TaskItem.__mro__ and Component in TaskItem.__mro__
    assert Component in TaskInput.__mro__

    board.submit_task("Buy milk", "")
    item = board.column(TaskStatus.ACTIVE).items[0]
    assert isinstance(item, TaskItem)
    assert item.element.listeners("dragstart") == [item.drag_start_handler]
