"""
Render host: turns template ids into live element trees.

The board never builds markup itself. Views ask the host to instantiate a
template and attach it under a host element (at the start or the end of its
children), then fill the named slots of the returned tree:

    task-input   form   > input#title, input#details, button
    task-list    section > header > h2 ; ul
    single-task  li     > h2 (title), p (details)

Elements carry event listeners; dispatch_event() bubbles an event from the
target up through its ancestors the way a browser does.
"""
import logging
from typing import Callable, Dict, List, Optional

from markupsafe import Markup, escape

logger = logging.getLogger(__name__)

VOID_TAGS = {"input", "br", "hr", "img"}


class RenderError(Exception):
    """Raised when a template or host element cannot be resolved."""
    pass


class Event:
    """A UI event travelling through the element tree."""

    def __init__(self, type: str, **detail):
        self.type = type
        self.detail = detail
        self.target: Optional["Element"] = None
        self.current_target: Optional["Element"] = None
        self.default_prevented = False
        self.propagation_stopped = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


EventHandler = Callable[[Event], None]


class ClassList:
    """Ordered set of CSS class names."""

    def __init__(self, names: Optional[List[str]] = None):
        self._names: List[str] = []
        for name in names or []:
            self.add(name)

    def add(self, name: str) -> None:
        if name not in self._names:
            self._names.append(name)

    def remove(self, name: str) -> None:
        if name in self._names:
            self._names.remove(name)

    def contains(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __iter__(self):
        return iter(self._names)

    def __len__(self):
        return len(self._names)


class Element:
    """A node in the rendered tree."""

    def __init__(self, tag: str, id: str = "", classes: Optional[List[str]] = None,
                 text: str = "", attrs: Optional[Dict[str, str]] = None,
                 children: Optional[List["Element"]] = None):
        self.tag = tag
        self.id = id
        self.class_list = ClassList(classes)
        self.text_content = text
        self.attrs: Dict[str, str] = dict(attrs or {})
        self.parent: Optional["Element"] = None
        self.children: List["Element"] = []
        self._listeners: Dict[str, List[EventHandler]] = {}
        for child in children or []:
            self.append_child(child)

    def __repr__(self):
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident} children={len(self.children)}>"

    # ── Inputs ──

    @property
    def value(self) -> str:
        return self.attrs.get("value", "")

    @value.setter
    def value(self, new_value: str) -> None:
        self.attrs["value"] = new_value

    # ── Tree ──

    def append_child(self, child: "Element") -> "Element":
        child.parent = self
        self.children.append(child)
        return child

    def prepend_child(self, child: "Element") -> "Element":
        child.parent = self
        self.children.insert(0, child)
        return child

    def clear(self) -> None:
        """Drop every child (the equivalent of innerHTML = '')."""
        for child in self.children:
            child.parent = None
        self.children = []

    def iter(self):
        """Depth-first walk over this element and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter()

    def query_selector(self, selector: str) -> Optional["Element"]:
        """First descendant matching a tag name or '#id' (self excluded)."""
        for node in self.iter():
            if node is self:
                continue
            if selector.startswith("#"):
                if node.id == selector[1:]:
                    return node
            elif node.tag == selector:
                return node
        return None

    # ── Events ──

    def add_event_listener(self, event_type: str, handler: EventHandler) -> None:
        self._listeners.setdefault(event_type, []).append(handler)

    def listeners(self, event_type: str) -> List[EventHandler]:
        return list(self._listeners.get(event_type, []))

    def dispatch_event(self, event: Event) -> Event:
        """Run handlers on this element, then bubble to each ancestor."""
        event.target = self
        node: Optional[Element] = self
        while node is not None and not event.propagation_stopped:
            event.current_target = node
            for handler in node.listeners(event.type):
                handler(event)
            node = node.parent
        event.current_target = None
        return event

    # ── Output ──

    def to_html(self) -> Markup:
        attrs = []
        if self.id:
            attrs.append(f' id="{escape(self.id)}"')
        if len(self.class_list):
            attrs.append(f' class="{escape(" ".join(self.class_list))}"')
        for key, val in self.attrs.items():
            attrs.append(f' {escape(key)}="{escape(val)}"')
        opening = f"<{self.tag}{''.join(attrs)}>"
        if self.tag in VOID_TAGS:
            return Markup(opening)
        inner = "".join(str(child.to_html()) for child in self.children)
        return Markup(f"{opening}{escape(self.text_content)}{inner}</{self.tag}>")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Templates
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def _task_input_template() -> Element:
    return Element("form", children=[
        Element("div", classes=["form-control"], children=[
            Element("label", text="Title", attrs={"for": "title"}),
            Element("input", id="title", attrs={"type": "text", "name": "title", "value": ""}),
        ]),
        Element("div", classes=["form-control"], children=[
            Element("label", text="Details", attrs={"for": "details"}),
            Element("input", id="details", attrs={"type": "text", "name": "details", "value": ""}),
        ]),
        Element("button", text="ADD TASK", attrs={"type": "submit"}),
    ])


def _task_list_template() -> Element:
    return Element("section", classes=["tasks"], children=[
        Element("header", children=[Element("h2")]),
        Element("ul"),
    ])


def _single_task_template() -> Element:
    return Element("li", attrs={"draggable": "true"}, children=[
        Element("h2"),
        Element("p"),
    ])


DEFAULT_TEMPLATES: Dict[str, Callable[[], Element]] = {
    "task-input": _task_input_template,
    "task-list": _task_list_template,
    "single-task": _single_task_template,
}


class RenderHost:
    """Instantiates templates and attaches them to host elements."""

    def __init__(self, root_id: str = "app",
                 templates: Optional[Dict[str, Callable[[], Element]]] = None):
        self.root = Element("div", id=root_id)
        self.templates = dict(DEFAULT_TEMPLATES if templates is None else templates)

    def register_template(self, template_id: str, factory: Callable[[], Element]) -> None:
        self.templates[template_id] = factory

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        for node in self.root.iter():
            if node.id == element_id:
                return node
        return None

    def instantiate(self, template_id: str, host_element_id: str,
                    insert_at_start: bool = False,
                    new_element_id: Optional[str] = None) -> Element:
        """
        Build a fresh tree from a template and attach it under a host element.

        Raises:
            RenderError if either the template or the host is unknown.
        """
        factory = self.templates.get(template_id)
        if factory is None:
            raise RenderError(f"Unknown template: {template_id}")
        host = self.get_element_by_id(host_element_id)
        if host is None:
            raise RenderError(f"Host element not found: {host_element_id}")

        element = factory()
        if new_element_id:
            element.id = new_element_id

        if insert_at_start:
            host.prepend_child(element)
        else:
            host.append_child(element)
        return element

    def to_html(self) -> Markup:
        return self.root.to_html()
