"""Protocol definitions for the player core.

- Events: core, container and mediator events
- Observers: protocols for components that react to those events
- Collaborators: containers, container factory, plugins, media control
"""

from .collaborators import Container, ContainerFactory, MediaControl, Plugin, Renderable
from .events import ContainerEvent, CoreEvent, PlayerEvent
from .observers import ContainerObserver, CoreObserver

__all__ = [
    # Collaborators
    "Container",
    "ContainerFactory",
    "MediaControl",
    "Plugin",
    "Renderable",
    # Events
    "ContainerEvent",
    "CoreEvent",
    "PlayerEvent",
    # Observers
    "ContainerObserver",
    "CoreObserver",
]
