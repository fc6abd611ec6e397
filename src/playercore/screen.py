"""
Platform fullscreen adapter.

Browsers report fullscreen changes under several vendor-specific event names.
FullscreenPlatform binds all of them on the document and republishes a single
normalized change signal, so the fullscreen state machine never sees the
naming variance.

Capability is declared, not detected: ``native_fullscreen=False`` selects the
degraded mode (fullscreen emulated with a CSS class, as on some mobile
browsers) and the platform API is never called.
"""

import logging
from collections.abc import Callable
from typing import Optional

from playercore.element import Element, EventTarget
from playercore.models import Size

logger = logging.getLogger(__name__)

FULLSCREEN_CHANGE_EVENTS = (
    "fullscreenchange",
    "webkitfullscreenchange",
    "mozfullscreenchange",
    "MSFullscreenChange",
)


class Document(EventTarget):
    """
    In-process document: viewport size and the fullscreen element.

    Entering or leaving fullscreen dispatches ``change_event``, which defaults
    to the standard name; pass a vendor name to emulate a prefixed browser.
    """

    def __init__(
        self,
        viewport_width: int = 1280,
        viewport_height: int = 720,
        change_event: str = "fullscreenchange",
    ):
        super().__init__()
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.change_event = change_event
        self.fullscreen_element: Optional[Element] = None

    def request_fullscreen(self, element: Element) -> None:
        self.fullscreen_element = element
        self.dispatch(self.change_event)

    def exit_fullscreen(self) -> None:
        """Leave fullscreen. Also what a user pressing Escape triggers."""
        if self.fullscreen_element is None:
            return
        self.fullscreen_element = None
        self.dispatch(self.change_event)


class FullscreenPlatform:
    """Capability interface over a document's fullscreen API."""

    def __init__(self, document: Optional[Document] = None, native_fullscreen: bool = True):
        """
        Args:
            document: The document to drive (a fresh Document if None)
            native_fullscreen: False on platforms without a native fullscreen API
        """
        self.document = document or Document()
        self.native_fullscreen = native_fullscreen
        self._listeners: list[Callable[[], None]] = []
        self._bound = False

    def is_fullscreen(self) -> bool:
        return self.document.fullscreen_element is not None

    def request_fullscreen(self, element: Element) -> None:
        self.document.request_fullscreen(element)

    def cancel_fullscreen(self) -> None:
        self.document.exit_fullscreen()

    def viewport_size(self) -> Size:
        return Size(width=self.document.viewport_width, height=self.document.viewport_height)

    def add_fullscreen_listener(self, listener: Callable[[], None]) -> None:
        """Subscribe to the normalized fullscreen change signal."""
        if listener not in self._listeners:
            self._listeners.append(listener)
        if not self._bound:
            for name in FULLSCREEN_CHANGE_EVENTS:
                self.document.bind(name, self._on_native_change)
            self._bound = True

    def remove_fullscreen_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
        if not self._listeners and self._bound:
            for name in FULLSCREEN_CHANGE_EVENTS:
                self.document.unbind(name, self._on_native_change)
            self._bound = False

    def _on_native_change(self, _event: object) -> None:
        logger.debug(f"Native fullscreen change (fullscreen={self.is_fullscreen()})")
        for listener in list(self._listeners):
            listener()
