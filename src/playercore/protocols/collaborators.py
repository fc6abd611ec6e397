"""Interfaces of the collaborators the core orchestrates.

Containers, their factory and plugins are built outside the core; these
protocols describe only what the core calls on them.
"""

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from playercore.element import Element
    from playercore.models import CoreOptions

from .events import ContainerEvent
from .observers import ContainerObserver


@runtime_checkable
class Container(Protocol):
    """A playback-backend wrapper managed by the core."""

    el: "Element"
    playback: Any

    def render(self) -> "Container":
        """Render into ``el`` and return self."""
        ...

    def destroy(self) -> None:
        """Tear down; must notify observers with ContainerEvent.DESTROYED."""
        ...

    async def wait_ready(self) -> None:
        """Return once the container has signaled readiness."""
        ...

    def get_playback_type(self) -> Optional[str]:
        ...

    def configure(self, options: "CoreOptions") -> None:
        ...

    def trigger(self, event: ContainerEvent) -> None:
        """Receive a notification from the core (media control show/hide)."""
        ...

    def register_observer(self, observer: ContainerObserver) -> None:
        ...

    def unregister_observer(self, observer: ContainerObserver) -> None:
        ...


@runtime_checkable
class ContainerFactory(Protocol):
    """Builds containers from source descriptors."""

    async def create_containers(self, options: "CoreOptions") -> list[Container]:
        """Create one container per configured source."""
        ...

    def create_container(self, source: Any, options: "CoreOptions") -> Container:
        """Create a single container synchronously."""
        ...


@runtime_checkable
class Plugin(Protocol):
    """A core plugin. ``name`` should be unique among attached plugins."""

    name: str

    def destroy(self) -> None:
        ...


@runtime_checkable
class Renderable(Protocol):
    """Render capability: plugins with it get their element attached to the widget."""

    el: "Element"

    def render(self) -> Any:
        ...


@runtime_checkable
class MediaControl(Plugin, Protocol):
    """The media-control plugin, registered under the name ``"media_control"``."""

    def show(self, event: Any = None) -> None:
        ...

    def hide(self, delay: Optional[float] = None) -> None:
        ...

    def enable(self) -> None:
        ...

    def disable(self) -> None:
        ...
