"""Observer protocols for core and container events."""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .collaborators import Container

from .events import ContainerEvent, CoreEvent


@runtime_checkable
class CoreObserver(Protocol):
    """
    Observer that receives events emitted on the Core.

    Plugins and external listeners implement this to follow container
    activation, readiness, fullscreen and option changes.
    """

    def on_core_event(self, event: CoreEvent, **kwargs: Any) -> None:
        """
        Handle a core event.

        Args:
            event: The type of core event
            **kwargs: Event-specific data:
                - CONTAINER_ACTIVE: 'container' (the new active container or None)
                - CONTAINERS_CREATED: 'containers' (list of appended containers)
                - FULLSCREEN: 'fullscreen' (platform fullscreen state)
                - OPTIONS_CHANGE: 'options' (the merged CoreOptions)

        Threading:
            Called synchronously on the event loop, right after the state
            change that caused it.

        Error Handling:
            Exceptions raised by observers are caught and logged; they do not
            reach the code that changed the state.
        """
        ...


@runtime_checkable
class ContainerObserver(Protocol):
    """Observer that receives events emitted by a container."""

    def on_container_event(self, event: ContainerEvent, container: "Container") -> None:
        """
        Handle a container event.

        Args:
            event: The type of container event
            container: The container that emitted it
        """
        ...
