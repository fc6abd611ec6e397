"""Size tracking and resize observation for the widget element."""

import asyncio
import logging
from collections.abc import Callable
from typing import Optional

from playercore.element import Element
from playercore.mediator import ScopedChannel
from playercore.models import CoreOptions, PlayerInfo, Size
from playercore.protocols import PlayerEvent
from playercore.screen import FullscreenPlatform

logger = logging.getLogger(__name__)


class SizeTracker:
    """
    Keeps the widget element's size and the PlayerInfo size readings in sync.

    Responsibilities:
    - Apply configured sizes to the element (``resize``)
    - Switch between viewport size and configured size on fullscreen changes
      (``update_size``)
    - Poll the element's measured box for changes made outside the widget's
      API (``enable_observer`` / ``disable_observer``)

    Every change is published as ``PlayerEvent.RESIZE`` on the instance's
    ScopedChannel.
    """

    def __init__(
        self,
        element: Element,
        options: CoreOptions,
        player_info: PlayerInfo,
        channel: ScopedChannel,
        platform: FullscreenPlatform,
        is_fullscreen: Optional[Callable[[], bool]] = None,
    ):
        """
        Initialize the size tracker.

        Args:
            element: The widget's root element
            options: Shared options; ``width``/``height`` hold the configured size
            player_info: Size readings for this instance
            channel: Mediator channel scoped to this instance
            platform: Fullscreen platform (viewport size, capability flag)
            is_fullscreen: Fullscreen query; defaults to the platform's own.
                The fullscreen controller passes its query so the emulated
                state counts on degraded platforms.
        """
        self.element = element
        self.options = options
        self.player_info = player_info
        self.channel = channel
        self.platform = platform
        self._is_fullscreen = is_fullscreen or platform.is_fullscreen
        self._observer_task: Optional[asyncio.Task] = None

    def update_size(self) -> None:
        """Apply the viewport size in fullscreen, or restore the configured size."""
        if self._is_fullscreen():
            self._set_fullscreen()
        else:
            self._set_player_size()
        self._publish(self.player_info.current_size)

    def _set_fullscreen(self) -> None:
        if not self.platform.native_fullscreen:
            return
        self.element.add_class("fullscreen")
        self.element.remove_attribute("style")
        self.player_info.previous_size = Size(width=self.options.width, height=self.options.height)
        self.player_info.current_size = self.platform.viewport_size()

    def _set_player_size(self) -> None:
        self.element.remove_class("fullscreen")
        self.player_info.current_size = self.player_info.previous_size
        self.player_info.previous_size = self.platform.viewport_size()
        self.resize(self.player_info.current_size)

    def resize(self, size: Size) -> None:
        """
        Write ``size`` to the element and the configuration.

        Pixels are appended only when both dimensions are unit-less numbers;
        otherwise both values are written unchanged.

        Args:
            size: The new logical size
        """
        width, height = size.to_css()
        self.element.style["width"] = width
        self.element.style["height"] = height

        self.player_info.previous_size = Size(width=self.options.width, height=self.options.height)
        self.options.width = size.width
        self.options.height = size.height
        self.player_info.current_size = size
        logger.debug(f"Resized player {self.channel.player_id} to {width} x {height}")
        self._publish(self.player_info.current_size)

    # =================================================================
    # Resize observer
    # =================================================================

    @property
    def observing(self) -> bool:
        return self._observer_task is not None and not self._observer_task.done()

    def enable_observer(self, interval: Optional[float] = None) -> None:
        """
        Start polling the element's box size.

        Replaces a poller that is already running. Must be called while the
        event loop is running.

        Args:
            interval: Seconds between polls (defaults to ``options.resize_poll_interval``)
        """
        self.disable_observer()
        interval = interval if interval is not None else self.options.resize_poll_interval
        loop = asyncio.get_running_loop()
        self._observer_task = loop.create_task(self._poll(interval))
        logger.debug(f"Resize observer started (every {interval}s)")

    def disable_observer(self) -> None:
        """Stop polling. Safe to call when no poller is running."""
        if self._observer_task is not None:
            self._observer_task.cancel()
            self._observer_task = None
            logger.debug("Resize observer stopped")

    def check_size(self) -> bool:
        """
        Compare the element's box with ``computed_size`` once.

        Returns:
            True if the size changed and a resize was published
        """
        computed = self.player_info.computed_size
        width, height = self.element.client_width, self.element.client_height
        if computed.width == width and computed.height == height:
            return False

        self.player_info.computed_size = Size(width=width, height=height)
        self._publish(self.player_info.computed_size)
        return True

    async def _poll(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self.check_size()

    def _publish(self, size: Size) -> None:
        self.channel.trigger(PlayerEvent.RESIZE, size)
