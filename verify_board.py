#!/usr/bin/env python3
"""
Quick verification that the task board works end-to-end.
"""
from taskboard.app import TaskBoard
from taskboard.dnd import DragPhase, DragSession
from taskboard.schema import TaskStatus


def main():
    print("=" * 60)
    print("Task Board Verification")
    print("=" * 60)

    print("\n[1/5] Building board...")
    board = TaskBoard()
    active = board.column(TaskStatus.ACTIVE)
    finished = board.column(TaskStatus.FINISHED)
    print("✅ Board built (input form + 2 columns)")

    print("\n[2/5] Submitting a task through the input form...")
    task = board.submit_task("Buy milk", "2 liters")
    if task is None:
        print("❌ Task creation failed")
        return
    print(f"✅ Task created: {task.id}")
    print(f"   Active column: {[t.title for t in active.assigned_tasks]}")

    print("\n[3/5] Submitting an empty title...")
    if board.submit_task("   ") is None:
        print(f"✅ Rejected: {board.alerts[-1]}")
    else:
        print("❌ Empty title was accepted")
        return

    print("\n[4/5] Dragging the task to FINISHED...")
    session = DragSession()
    session.start(board.host.get_element_by_id(task.id))
    accepted = session.over(finished.element)
    print(f"   → dragover accepted: {accepted}, droppable: {finished.droppable}")
    session.drop(finished.element)
    phase = session.end()
    print(f"   → terminal phase: {phase.value}")
    print(f"   → history: {' → '.join(p.value for p in session.history)}")
    if phase != DragPhase.DROPPED or finished.droppable:
        print("❌ Drag did not complete cleanly")
        return

    print("\n[5/5] Checking columns...")
    print(f"   Active:   {[t.title for t in active.assigned_tasks]}")
    print(f"   Finished: {[t.title for t in finished.assigned_tasks]}")
    if active.assigned_tasks or len(finished.assigned_tasks) != 1:
        print("❌ Task is in the wrong column")
        return

    print("\n" + "=" * 60)
    print("✅ ALL CHECKS PASSED")
    print("=" * 60)
    print("\n" + str(board.to_html()))


if __name__ == "__main__":
    main()
