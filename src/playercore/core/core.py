"""
Player core orchestrator.

The Core composes the four sub-components and exposes the widget's public
API. It owns:

- Containers (through ContainerLifecycleManager) and the active container
- Plugins (through PluginRegistry)
- The fullscreen state machine (FullscreenController)
- Size bookkeeping and resize observation (SizeTracker)
- The ready barrier: ``ready`` flips once every container of a creation
  request has signaled readiness

All state changes are re-broadcast as CoreEvents to registered CoreObservers,
synchronously, before the next statement after the change runs.

Architecture:
    Core
    ├── ContainerLifecycleManager  (factory, tracking, ready barrier)
    ├── PluginRegistry             (media_control and other plugins)
    ├── FullscreenController       (FullscreenPlatform adapter)
    └── SizeTracker                (PlayerInfo, Mediator channel)
"""

import asyncio
import logging
from collections.abc import Coroutine, Mapping
from typing import Any, Optional

from playercore.element import Element
from playercore.exceptions import CoreDestroyedError, MissingPluginError
from playercore.mediator import Mediator
from playercore.models import CoreOptions, PlayerInfo, Size
from playercore.observer import ObserverManager
from playercore.protocols import (
    Container,
    ContainerEvent,
    ContainerFactory,
    CoreEvent,
    CoreObserver,
    MediaControl,
    Plugin,
)
from playercore.screen import FullscreenPlatform

from .containers import ContainerLifecycleManager
from .fullscreen import FullscreenController
from .plugins import PluginRegistry
from .size_tracker import SizeTracker

logger = logging.getLogger(__name__)

MEDIA_CONTROL = "media_control"


class Core:
    """
    Top-level orchestrator of one player widget instance.

    Example:
        ```python
        core = Core({"sources": ["movie.mp4"], "width": 640, "height": 360}, factory)
        core.add_plugin(media_control)
        core.register_observer(listener)
        await core.create_containers()   # returns once every container is ready
        core.load("other.mp4")           # fire-and-forget; READY follows
        core.destroy()
        ```
    """

    def __init__(
        self,
        options: CoreOptions | Mapping[str, Any] | None,
        factory: ContainerFactory,
        platform: Optional[FullscreenPlatform] = None,
        mediator: Optional[Mediator] = None,
        element: Optional[Element] = None,
    ):
        """
        Initialize the core. No containers are created until create_containers().

        Args:
            options: Options mapping or CoreOptions (kept by reference)
            factory: Builds containers from ``options.sources``
            platform: Fullscreen platform adapter (a fresh in-process one if None)
            mediator: Pub/sub bus shared by player instances (a private one if None)
            element: Root element of the widget (a new ``div`` if None)

        Raises:
            ConfigValidationError: If ``options`` has invalid values
        """
        self.options = CoreOptions.from_value(options)
        self.player_info = PlayerInfo()
        self.mediator = mediator or Mediator()
        self.channel = self.mediator.scoped(lambda: self.options.player_id)
        self.platform = platform or FullscreenPlatform()

        self.el = element or Element("div")
        self.el.attributes.update({"data-player": "", "tabindex": 9999})

        self.ready = False
        self._destroyed = False
        self._reloading = False
        self._active_container: Optional[Container] = None
        self._observers = ObserverManager[CoreObserver](observer_type_name="core")
        self._pending: set[asyncio.Task] = set()

        self.plugins = PluginRegistry(self.el)
        self.container_manager = ContainerLifecycleManager(
            factory, on_removed=self._on_container_removed
        )
        self.fullscreen = FullscreenController(self.el, self.platform, self._on_fullscreen_change)
        self.size = SizeTracker(
            self.el,
            self.options,
            self.player_info,
            self.channel,
            self.platform,
            is_fullscreen=self.fullscreen.is_fullscreen,
        )

        self.el.bind("mousemove", self.show_media_control)
        self.el.bind("mouseleave", self.hide_media_control)
        logger.info(f"Core initialized for player {self.options.player_id}")

    # =================================================================
    # State
    # =================================================================

    @property
    def is_ready(self) -> bool:
        return bool(self.ready)

    @property
    def containers(self) -> list[Container]:
        return self.container_manager.containers

    @property
    def active_container(self) -> Optional[Container]:
        return self._active_container

    @active_container.setter
    def active_container(self, container: Optional[Container]) -> None:
        self._active_container = container
        self.trigger(CoreEvent.CONTAINER_ACTIVE, container=container)

    @property
    def media_control(self) -> Optional[MediaControl]:
        return self.get_plugin(MEDIA_CONTROL)

    def get_current_container(self) -> Optional[Container]:
        return self.active_container

    def get_current_playback(self) -> Any:
        container = self.get_current_container()
        return container.playback if container is not None else None

    def get_playback_type(self) -> Optional[str]:
        container = self.get_current_container()
        return container.get_playback_type() if container is not None else None

    # =================================================================
    # Events
    # =================================================================

    def register_observer(self, observer: CoreObserver) -> None:
        """
        Register an observer for core events.

        Args:
            observer: Object implementing CoreObserver
        """
        self._observers.register(observer)

    def unregister_observer(self, observer: CoreObserver) -> None:
        self._observers.unregister(observer)

    def trigger(self, event: CoreEvent, **kwargs: Any) -> None:
        """
        Emit a core event.

        Media-control requests (fullscreen toggle, shown, hidden) are handled
        by the core itself before observers are notified. Errors from those
        handlers propagate to the caller.

        Args:
            event: The core event
            **kwargs: Event-specific data passed to observers
        """
        if event == CoreEvent.MEDIACONTROL_FULLSCREEN:
            self.toggle_fullscreen()
        elif event == CoreEvent.MEDIACONTROL_SHOW:
            self.on_media_control_show(True)
        elif event == CoreEvent.MEDIACONTROL_HIDE:
            self.on_media_control_show(False)

        logger.debug(f"Core event {event.value} {kwargs or ''}")
        self._observers.notify("on_core_event", event, **kwargs)

    # =================================================================
    # Containers
    # =================================================================

    async def create_containers(self, options: Optional[Mapping[str, Any]] = None) -> "Core":
        """
        Build, install and wait for the configured containers.

        Args:
            options: Options merged into the stored options first (optional)

        Returns:
            The core, once every container is ready or a later load or
            destroy() has superseded this request

        Raises:
            ContainerCreationError: If the factory fails
            CoreDestroyedError: If the core was destroyed
        """
        self._ensure_alive("create containers")
        if options:
            self.options.merge(options)
        generation = self.container_manager.begin_generation()
        await self._build_containers(generation)
        return self

    async def _build_containers(self, generation: int) -> list[Container]:
        containers = await self.container_manager.create_all(self.options)
        if not self.container_manager.is_current(generation):
            logger.warning(
                f"Discarding {len(containers)} container(s) from a superseded load "
                f"(generation {generation}, current {self.container_manager.generation})"
            )
            self.container_manager.discard(containers)
            return []

        self.setup_containers(containers)
        ready = await self.container_manager.wait_all_ready(containers, generation)
        if not ready or not self.container_manager.is_current(generation):
            logger.debug(f"Generation {generation} superseded before it was ready")
            return containers

        if not self.ready:
            logger.info(f"Player {self.options.player_id} is ready")
        self.ready = True
        self.trigger(CoreEvent.READY)
        return containers

    def setup_containers(self, containers: list[Container]) -> list[Container]:
        """
        Install freshly created containers.

        Order: track them, emit CONTAINERS_CREATED, render them, activate the
        first one, render the widget, attach it to ``options.parent_element``.

        Returns:
            The tracked containers
        """
        for container in containers:
            self.container_manager.append_container(container)
        self.trigger(CoreEvent.CONTAINERS_CREATED, containers=self.containers)
        self.render_containers()
        tracked = self.containers
        self.active_container = tracked[0] if tracked else None
        self.render()
        self.el.append_to(self.options.parent_element)
        return self.containers

    def render_containers(self) -> None:
        for container in self.containers:
            self.el.append_child(container.render().el)

    def create_container(self, source: Any, options: Optional[CoreOptions] = None) -> Container:
        """
        Create one container synchronously, track it and render it.

        Raises:
            ContainerCreationError: If the factory fails
        """
        self._ensure_alive("create a container")
        container = self.container_manager.create_one(source, options or self.options)
        self.el.append_child(container.render().el)
        return container

    def load(self, sources: Any, mime_type: Optional[str] = None) -> asyncio.Task:
        """
        Replace every container with containers for ``sources``.

        Existing containers are destroyed and the active container is cleared
        immediately; the new containers are built in a task. Readiness is
        announced with CoreEvent.READY.

        Args:
            sources: A source or a list of sources
            mime_type: MIME type hint for the sources

        Returns:
            The task building the new containers. Awaiting it is optional;
            factory failures surface there as ContainerCreationError.

        Raises:
            RuntimeError: If no event loop is running (nothing is changed)
        """
        self._ensure_alive("load")
        loop = asyncio.get_running_loop()
        if not isinstance(sources, (list, tuple)):
            sources = [sources]

        self._reloading = True
        try:
            self.container_manager.destroy_all()
        finally:
            self._reloading = False
        self.active_container = None

        self.options.merge({"sources": list(sources), "mime_type": mime_type})
        generation = self.container_manager.begin_generation()
        logger.info(f"Loading {len(sources)} source(s) (generation {generation})")
        return self._schedule(loop, self._build_containers(generation))

    def configure(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Optional[asyncio.Task]:
        """
        Merge options into the stored configuration.

        A ``source``/``sources`` key reloads every container (see load()),
        even when it holds an empty list; otherwise OPTIONS_CHANGE is
        emitted and every container is reconfigured in place.

        Returns:
            The load task when sources were given, else None
        """
        self._ensure_alive("configure")
        options = {**(options or {}), **kwargs}
        if "source" in options or "sources" in options:
            sources = options.get("source", options.get("sources"))
            task = self.load(
                sources if sources is not None else [],
                options.get("mime_type") or self.options.mime_type,
            )
            self.options.merge({k: v for k, v in options.items() if k not in ("source", "sources")})
            return task

        self.options.merge(options)

        self.trigger(CoreEvent.OPTIONS_CHANGE, options=self.options)
        for container in self.containers:
            container.configure(self.options)
        return None

    def _on_container_removed(self, container: Container) -> None:
        if container is self._active_container and not self._reloading:
            self.active_container = None

    def _schedule(self, loop: asyncio.AbstractEventLoop, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Container load failed: {error}")

    # =================================================================
    # Rendering and size
    # =================================================================

    def render(self) -> "Core":
        """
        Seed the size readings and start the resize observer.

        Missing width/height are taken from the element's measured box.
        """
        self.options.width = self.options.width or self.el.client_width
        self.options.height = self.options.height or self.el.client_height
        size = Size(width=self.options.width, height=self.options.height)
        self.player_info.previous_size = size.model_copy()
        self.player_info.current_size = size.model_copy()
        self.player_info.computed_size = size.model_copy()
        self.size.update_size()
        self.size.enable_observer()
        return self

    def resize(self, size: Size | Mapping[str, Any]) -> None:
        """Resize the widget; numbers are pixels, strings pass through."""
        self._ensure_alive("resize")
        self.size.resize(size if isinstance(size, Size) else Size.model_validate(size))

    def update_size(self) -> None:
        self.size.update_size()

    def enable_resize_observer(self) -> None:
        self.size.enable_observer()

    def disable_resize_observer(self) -> None:
        self.size.disable_observer()

    # =================================================================
    # Fullscreen
    # =================================================================

    def toggle_fullscreen(self) -> None:
        self._ensure_alive("toggle fullscreen")
        self.fullscreen.toggle()
        self._request_media_control_show()

    def _on_fullscreen_change(self, fullscreen: bool) -> None:
        self.trigger(CoreEvent.FULLSCREEN, fullscreen=fullscreen)
        self.size.update_size()
        self._request_media_control_show()

    def _request_media_control_show(self) -> None:
        media_control = self.media_control
        if media_control is None:
            logger.debug("No media control to show")
            return
        media_control.show()

    # =================================================================
    # Plugins and media control
    # =================================================================

    def add_plugin(self, plugin: Plugin) -> None:
        self._ensure_alive("add a plugin")
        self.plugins.add(plugin)

    def get_plugin(self, name: str) -> Optional[Plugin]:
        return self.plugins.get(name)

    def has_plugin(self, name: str) -> bool:
        return self.plugins.has(name)

    def _require_media_control(self, operation: str) -> MediaControl:
        media_control = self.media_control
        if media_control is None:
            raise MissingPluginError(MEDIA_CONTROL, operation)
        return media_control

    def show_media_control(self, event: Any = None) -> None:
        self._require_media_control("show the media control").show(event)

    def hide_media_control(self, event: Any = None) -> None:
        self._require_media_control("hide the media control").hide(self.options.hide_media_control_delay)

    def enable_media_control(self) -> None:
        self._require_media_control("enable the media control").enable()

    def disable_media_control(self) -> None:
        self._require_media_control("disable the media control").disable()
        self.el.remove_class("nocursor")

    def on_media_control_show(self, showing: bool) -> None:
        """
        React to the media control being shown or hidden.

        The active container (if any) is told, and the cursor is hidden only
        while the control is hidden in fullscreen.
        """
        container = self.get_current_container()
        if container is not None:
            container.trigger(
                ContainerEvent.MEDIACONTROL_SHOW if showing else ContainerEvent.MEDIACONTROL_HIDE
            )

        if showing:
            self.el.remove_class("nocursor")
        elif self.fullscreen.is_fullscreen():
            self.el.add_class("nocursor")

    # =================================================================
    # Lifecycle
    # =================================================================

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        """
        Tear the widget down. No method may be called afterwards.

        Stops the resize observer, destroys every container and every plugin
        once, detaches the element and stops listening to the platform.
        In-flight loads finish without installing anything, including those
        still waiting for their containers to become ready.
        """
        self._ensure_alive("destroy")
        self._destroyed = True
        self.container_manager.begin_generation()
        self.size.disable_observer()
        self.container_manager.destroy_all()
        self.plugins.destroy_all()
        self.el.remove()
        self.el.unbind("mousemove", self.show_media_control)
        self.el.unbind("mouseleave", self.hide_media_control)
        self.fullscreen.close()
        self.ready = False
        self._observers.clear()
        logger.info(f"Core destroyed for player {self.options.player_id}")

    def _ensure_alive(self, operation: str) -> None:
        if self._destroyed:
            raise CoreDestroyedError(operation)
