"""
Task schema.

Task lifecycle:
  Active ⇄ Finished

A task is created Active by the store and only its status ever changes.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Dict, Any
import time
import uuid


class TaskStatus(Enum):
    """The two board columns a task can live in."""
    ACTIVE = "active"
    FINISHED = "finished"

    @classmethod
    def from_str(cls, value: str) -> "TaskStatus":
        try:
            return cls[value.strip().upper()]
        except (KeyError, AttributeError):
            return cls.ACTIVE


def make_task_id() -> str:
    """Generate a sortable unique task ID (ms-precision timestamp + random hex)."""
    ts = int(time.time() * 1000)
    rand = uuid.uuid4().hex[:12]
    return f"task-{ts}-{rand}"


@dataclass
class Task:
    """One card on the board."""

    id: str
    title: str
    details: str = ""
    status: TaskStatus = TaskStatus.ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "details": self.details,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Deserialize from dict."""
        status = TaskStatus.ACTIVE
        if data.get("status"):
            try:
                status = TaskStatus(data["status"])
            except ValueError:
                status = TaskStatus.from_str(str(data["status"]))

        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            details=data.get("details", "") or "",
            status=status,
        )
