"""
In-memory collaborators for running a Core without real playback backends.

- SandboxContainer: container with a controllable readiness signal
- SandboxContainerFactory: builds one SandboxContainer per source
- SandboxMediaControl: media-control plugin that records calls and reports
  visibility changes back to the core

Used by the ``playercore demo`` command and by the test suite.
"""

import asyncio
import logging
from typing import Any, Optional

from playercore.element import Element
from playercore.models import CoreOptions
from playercore.observer import ObserverManager
from playercore.protocols import ContainerEvent, ContainerObserver, CoreEvent

logger = logging.getLogger(__name__)


class SandboxPlayback:
    """Stand-in playback backend."""

    def __init__(self, source: Any, playback_type: str = "vod"):
        self.source = source
        self.playback_type = playback_type

    def __repr__(self) -> str:
        return f"SandboxPlayback({self.source!r})"


class SandboxContainer:
    """
    Container whose readiness is signaled explicitly with ``mark_ready()``.

    Attributes:
        destroy_calls: Number of times destroy() was called
        configured_with: Options passed to each configure() call
        received: Events received from the core through trigger()
    """

    def __init__(self, source: Any, options: CoreOptions, playback_type: str = "vod"):
        self.source = source
        self.options = options
        self.playback = SandboxPlayback(source, playback_type)
        self.el = Element("div", {"data-container": ""})
        self.destroy_calls = 0
        self.render_calls = 0
        self.configured_with: list[CoreOptions] = []
        self.received: list[ContainerEvent] = []
        self._ready = asyncio.Event()
        self._observers = ObserverManager[ContainerObserver](observer_type_name="container")

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    def mark_ready(self) -> None:
        self._ready.set()

    async def wait_ready(self) -> None:
        await self._ready.wait()

    def render(self) -> "SandboxContainer":
        self.render_calls += 1
        return self

    def get_playback_type(self) -> str:
        return self.playback.playback_type

    def configure(self, options: CoreOptions) -> None:
        self.options = options
        self.configured_with.append(options)

    def trigger(self, event: ContainerEvent) -> None:
        self.received.append(event)

    def register_observer(self, observer: ContainerObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: ContainerObserver) -> None:
        self._observers.unregister(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def destroy(self) -> None:
        self.destroy_calls += 1
        self.el.remove()
        self._observers.notify("on_container_event", ContainerEvent.DESTROYED, self)

    def __repr__(self) -> str:
        return f"SandboxContainer({self.source!r})"


class SandboxContainerFactory:
    """
    Builds one SandboxContainer per configured source.

    Args:
        auto_ready: Mark containers ready automatically
        ready_delay: Seconds before auto-ready containers become ready
        error: Exception to raise from create_containers(), if any
        gate: Event each request waits on after reading its sources, if any
    """

    def __init__(
        self,
        auto_ready: bool = True,
        ready_delay: float = 0.0,
        error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        self.auto_ready = auto_ready
        self.ready_delay = ready_delay
        self.error = error
        self.gate = gate
        self.created: list[SandboxContainer] = []
        self.requests = 0

    async def create_containers(self, options: CoreOptions) -> list[SandboxContainer]:
        self.requests += 1
        sources = list(options.sources)
        await asyncio.sleep(0)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return [self.create_container(source, options) for source in sources]

    def create_container(self, source: Any, options: CoreOptions) -> SandboxContainer:
        container = SandboxContainer(source, options)
        self.created.append(container)
        if self.auto_ready:
            if self.ready_delay > 0:
                asyncio.get_running_loop().call_later(self.ready_delay, container.mark_ready)
            else:
                container.mark_ready()
        logger.debug(f"Created sandbox container for {source!r}")
        return container


class SandboxMediaControl:
    """
    Media-control plugin with a rendered element.

    When attached to a core, visibility changes are reported back with
    ``CoreEvent.MEDIACONTROL_SHOW`` / ``MEDIACONTROL_HIDE``.
    """

    name = "media_control"

    def __init__(self, core: Any = None):
        self.core = core
        self.el = Element("div", {"data-media-control": ""})
        self.visible = False
        self.enabled = True
        self.calls: list[tuple[str, Any]] = []
        self.destroy_calls = 0

    def render(self) -> "SandboxMediaControl":
        return self

    def show(self, event: Any = None) -> None:
        self.calls.append(("show", event))
        if self.enabled and not self.visible:
            self.visible = True
            self._report(CoreEvent.MEDIACONTROL_SHOW)

    def hide(self, delay: Optional[float] = None) -> None:
        self.calls.append(("hide", delay))
        if self.visible:
            self.visible = False
            self._report(CoreEvent.MEDIACONTROL_HIDE)

    def enable(self) -> None:
        self.calls.append(("enable", None))
        self.enabled = True

    def disable(self) -> None:
        self.calls.append(("disable", None))
        self.enabled = False
        self.visible = False

    def destroy(self) -> None:
        self.destroy_calls += 1
        self.el.remove()

    def _report(self, event: CoreEvent) -> None:
        if self.core is not None:
            self.core.trigger(event)
