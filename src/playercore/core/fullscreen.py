"""Fullscreen state machine."""

import logging
from collections.abc import Callable

from playercore.element import Element
from playercore.screen import FullscreenPlatform

logger = logging.getLogger(__name__)


class FullscreenController:
    """
    Two-state (normal / fullscreen) machine mirroring the platform.

    The state is read from the platform on every decision instead of being
    cached, because the user can leave fullscreen (Escape key) without going
    through ``toggle()``.

    On platforms without native fullscreen (``platform.native_fullscreen`` is
    False) the controller emulates the state with the ``fullscreen`` class and
    never calls the platform API.

    Every change, native or emulated, calls ``on_change(is_fullscreen)``.
    """

    def __init__(
        self,
        element: Element,
        platform: FullscreenPlatform,
        on_change: Callable[[bool], None],
    ):
        """
        Initialize the controller and subscribe to the platform.

        Args:
            element: The widget's root element
            platform: Platform adapter with the normalized change signal
            on_change: Called with the new fullscreen state after every change
        """
        self.element = element
        self.platform = platform
        self._on_change = on_change
        self._emulated = False
        self.platform.add_fullscreen_listener(self.handle_change)

    @property
    def degraded(self) -> bool:
        return not self.platform.native_fullscreen

    def is_fullscreen(self) -> bool:
        if self.degraded:
            return self._emulated
        return self.platform.is_fullscreen()

    def toggle(self) -> None:
        """Enter fullscreen if the platform reports normal, otherwise leave it."""
        if not self.is_fullscreen():
            self._enter()
        else:
            self._exit()

    def _enter(self) -> None:
        logger.debug("Entering fullscreen")
        self.element.add_class("fullscreen")
        if self.degraded:
            self._emulated = True
            self.handle_change()
        else:
            self.platform.request_fullscreen(self.element)

    def _exit(self) -> None:
        logger.debug("Leaving fullscreen")
        self.element.remove_class("fullscreen", "nocursor")
        if self.degraded:
            self._emulated = False
            self.handle_change()
        else:
            self.platform.cancel_fullscreen()

    def handle_change(self) -> None:
        """Re-synchronize after any fullscreen change."""
        fullscreen = self.is_fullscreen()
        logger.info(f"Fullscreen changed: {fullscreen}")
        self._on_change(fullscreen)

    def close(self) -> None:
        """Stop listening to the platform."""
        self.platform.remove_fullscreen_listener(self.handle_change)
