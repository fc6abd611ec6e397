"""Events emitted by the player core and its collaborators.

- Core events: lifecycle and state changes observable on the Core instance
- Container events: notifications from and to playback containers
- Player events: mediator broadcasts scoped by player instance id
"""

from enum import Enum


class CoreEvent(Enum):
    """Events emitted on the Core instance."""

    CONTAINER_ACTIVE = "core:active:container"          # active container changed (may be None)
    CONTAINERS_CREATED = "core:containers:created"      # containers appended, before rendering
    READY = "core:ready"                                # every container of the latest request is ready
    FULLSCREEN = "core:fullscreen"                      # platform fullscreen state changed
    OPTIONS_CHANGE = "core:options:change"              # options merged without reloading
    MEDIACONTROL_FULLSCREEN = "core:mediacontrol:fullscreen"  # media control asks for a toggle
    MEDIACONTROL_SHOW = "core:mediacontrol:show"        # media control became visible
    MEDIACONTROL_HIDE = "core:mediacontrol:hide"        # media control became hidden


class ContainerEvent(Enum):
    """Events exchanged with containers."""

    DESTROYED = "container:destroyed"                   # container destroyed itself
    MEDIACONTROL_SHOW = "container:mediacontrol:show"   # sent by Core to the active container
    MEDIACONTROL_HIDE = "container:mediacontrol:hide"   # sent by Core to the active container


class PlayerEvent(Enum):
    """Mediator topics, published as ``"<player_id>:<value>"``."""

    RESIZE = "resize"
