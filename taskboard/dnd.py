"""
Drag transfer protocol.

A drag carries one string, the task id, under a fixed content type. Phases:

  IDLE → DRAGGING → {HOVERING ⇄ NOT_HOVERING} → DROPPED | CANCELLED → IDLE

DragSession plays the part of the platform: it fires dragstart / dragover /
dragleave / drop / dragend at elements in order and tracks the phase. A
drop is only delivered to a target that accepted the payload on dragover
(by calling prevent_default()), so no phase can be skipped.
"""
import logging
from enum import Enum
from typing import Dict, List, Optional, Protocol

from .render import Element, Event

logger = logging.getLogger(__name__)

# Content type marker for task-id payloads
TASK_ID_MIME = "text/plain"

EFFECT_MOVE = "move"


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING = "hovering"
    NOT_HOVERING = "not_hovering"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: Dict[DragPhase, List[DragPhase]] = {
    DragPhase.IDLE: [DragPhase.DRAGGING],
    DragPhase.DRAGGING: [DragPhase.HOVERING, DragPhase.CANCELLED],
    DragPhase.HOVERING: [DragPhase.NOT_HOVERING, DragPhase.DROPPED, DragPhase.CANCELLED],
    DragPhase.NOT_HOVERING: [DragPhase.HOVERING, DragPhase.CANCELLED],
    DragPhase.DROPPED: [DragPhase.IDLE],
    DragPhase.CANCELLED: [DragPhase.IDLE],
}


class DataTransfer:
    """
    Payload store for one drag gesture.

    Data is writable during dragstart, hidden while the drag is in flight
    (targets only see the types), and readable on drop.
    """

    def __init__(self):
        self._data: Dict[str, str] = {}
        self.effect_allowed = "uninitialized"
        self.drop_effect = "none"
        self.mode = "read/write"

    @property
    def types(self) -> List[str]:
        return list(self._data.keys())

    def set_data(self, mime: str, data: str) -> None:
        if self.mode != "read/write":
            return
        self._data.pop(mime, None)
        self._data[mime] = data

    def get_data(self, mime: str) -> str:
        if self.mode == "protected":
            return ""
        return self._data.get(mime, "")

    def clear_data(self) -> None:
        if self.mode == "read/write":
            self._data.clear()


class DragEvent(Event):
    def __init__(self, type: str, data_transfer: Optional[DataTransfer] = None, **detail):
        super().__init__(type, **detail)
        self.data_transfer = data_transfer


class DragSource(Protocol):
    def drag_start_handler(self, event: DragEvent) -> None: ...

    def drag_end_handler(self, event: DragEvent) -> None: ...


class DropTarget(Protocol):
    def drag_over_handler(self, event: DragEvent) -> None: ...

    def drop_handler(self, event: DragEvent) -> None: ...

    def drag_leave_handler(self, event: DragEvent) -> None: ...


def accepts_task_payload(event: DragEvent) -> bool:
    """True if the drag carries a task id as its primary type."""
    dt = event.data_transfer
    return bool(dt and dt.types and dt.types[0] == TASK_ID_MIME)


class DragSession:
    """Drives one drag gesture at a time through the protocol phases."""

    def __init__(self):
        self.phase = DragPhase.IDLE
        self.history: List[DragPhase] = [DragPhase.IDLE]
        self.source: Optional[Element] = None
        self.hovered: Optional[Element] = None
        self.data_transfer: Optional[DataTransfer] = None

    def _transition(self, new_phase: DragPhase) -> bool:
        if new_phase not in ALLOWED_TRANSITIONS[self.phase]:
            logger.warning(f"Refused drag transition {self.phase.value} → {new_phase.value}")
            return False
        self.phase = new_phase
        self.history.append(new_phase)
        return True

    def start(self, source: Element) -> bool:
        """Begin dragging `source`. Returns False if a drag is already underway."""
        if self.phase != DragPhase.IDLE:
            logger.warning(f"dragstart ignored: session is {self.phase.value}")
            return False

        self.data_transfer = DataTransfer()
        source.dispatch_event(DragEvent("dragstart", self.data_transfer))
        if not self.data_transfer.types:
            logger.debug("dragstart produced no payload; drag not started")
            self.data_transfer = None
            return False

        self.data_transfer.mode = "protected"
        self.source = source
        return self._transition(DragPhase.DRAGGING)

    def over(self, target: Element) -> bool:
        """Move the pointer over `target`. Returns True if the target accepted the payload."""
        if self.phase not in (DragPhase.DRAGGING, DragPhase.HOVERING, DragPhase.NOT_HOVERING):
            logger.warning(f"dragover ignored: session is {self.phase.value}")
            return False
        if self.hovered is not None and self.hovered is not target:
            self.leave(self.hovered)

        event = target.dispatch_event(DragEvent("dragover", self.data_transfer))
        if not event.default_prevented:
            return False

        self.hovered = target
        if self.phase == DragPhase.HOVERING:
            return True
        return self._transition(DragPhase.HOVERING)

    def leave(self, target: Element) -> None:
        if self.phase not in (DragPhase.DRAGGING, DragPhase.HOVERING, DragPhase.NOT_HOVERING):
            logger.warning(f"dragleave ignored: session is {self.phase.value}")
            return
        if target is not self.hovered:
            logger.debug(f"dragleave ignored: {target.id or target.tag} is not the hovered target")
            return
        target.dispatch_event(DragEvent("dragleave", self.data_transfer))
        self.hovered = None
        self._transition(DragPhase.NOT_HOVERING)

    def drop(self, target: Element) -> bool:
        """Release over `target`. Only delivered to a target currently accepting the drag."""
        if self.phase != DragPhase.HOVERING or target is not self.hovered:
            logger.warning(
                f"drop refused on {target.id or target.tag}: target has not accepted the drag"
            )
            return False

        self.data_transfer.mode = "read-only"
        self.data_transfer.drop_effect = EFFECT_MOVE
        event = DragEvent("drop", self.data_transfer)
        event.prevent_default()
        target.dispatch_event(event)
        self.hovered = None
        return self._transition(DragPhase.DROPPED)

    def end(self) -> DragPhase:
        """
        Finish the gesture with dragend on the source.

        Without a completed drop this is a cancellation: the store is never
        touched. Returns the terminal phase (DROPPED or CANCELLED).
        """
        if self.phase == DragPhase.IDLE:
            logger.warning("dragend ignored: no drag in progress")
            return self.phase

        if self.phase != DragPhase.DROPPED:
            if self.hovered is not None:
                self.leave(self.hovered)
            self._transition(DragPhase.CANCELLED)

        terminal = self.phase
        if self.source is not None:
            self.source.dispatch_event(DragEvent("dragend", self.data_transfer))
        self._transition(DragPhase.IDLE)
        self.source = None
        self.hovered = None
        self.data_transfer = None
        return terminal
