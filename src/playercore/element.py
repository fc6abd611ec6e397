"""In-process element tree for the rendered widget.

The core never touches a real DOM. It works against this small element model:
classes, inline style, attributes, children, a measured box size and named
event handlers. Hosts that render for real can pass any object with the same
interface.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any, Optional

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EventTarget:
    """Named-event handler registry (``bind``/``unbind``/``dispatch``)."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def bind(self, event_name: str, handler: Handler) -> None:
        if handler not in self._handlers[event_name]:
            self._handlers[event_name].append(handler)

    def unbind(self, event_name: str, handler: Handler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def dispatch(self, event_name: str, event: Any = None) -> None:
        """Call every handler bound to ``event_name`` with ``event``."""
        for handler in list(self._handlers.get(event_name, [])):
            handler(event)

    def has_handlers(self, event_name: str) -> bool:
        return bool(self._handlers.get(event_name))


class Element(EventTarget):
    """
    A rendered element.

    Attributes:
        tag: Element tag name
        attributes: Element attributes (e.g. ``data-player``)
        style: Inline style properties
        classes: Set of class names
        children: Child elements, in append order
        parent: Parent element, if attached
        client_width: Measured box width
        client_height: Measured box height
    """

    def __init__(
        self,
        tag: str = "div",
        attributes: Optional[dict[str, Any]] = None,
        client_width: int = 0,
        client_height: int = 0,
    ):
        super().__init__()
        self.tag = tag
        self.attributes: dict[str, Any] = dict(attributes or {})
        self.style: dict[str, str] = {}
        self.classes: set[str] = set()
        self.children: list["Element"] = []
        self.parent: Optional["Element"] = None
        self.client_width = client_width
        self.client_height = client_height

    def add_class(self, *names: str) -> None:
        self.classes.update(names)

    def remove_class(self, *names: str) -> None:
        self.classes.difference_update(names)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def remove_attribute(self, name: str) -> None:
        """Remove an attribute; ``"style"`` clears the inline style."""
        if name == "style":
            self.style.clear()
        self.attributes.pop(name, None)

    def append_child(self, child: "Element") -> "Element":
        """Append ``child``, detaching it from any previous parent first."""
        if child.parent is not None:
            child.parent.remove_child(child)
        self.children.append(child)
        child.parent = self
        return child

    def remove_child(self, child: "Element") -> None:
        if child in self.children:
            self.children.remove(child)
            child.parent = None

    def append_to(self, parent: Optional["Element"]) -> None:
        """Attach this element under ``parent``; a None parent is ignored."""
        if parent is None:
            logger.debug(f"No parent element for {self.tag}, leaving it detached")
            return
        parent.append_child(self)

    def remove(self) -> None:
        """Detach from the parent element."""
        if self.parent is not None:
            self.parent.remove_child(self)

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, classes={sorted(self.classes)})"
