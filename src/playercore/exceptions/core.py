"""Exceptions raised by the player core orchestration.

- ContainerCreationError: The container factory failed
- MissingPluginError: A required plugin is not registered
- CoreDestroyedError: The core was used after destroy()
"""

from .base import PlayerCoreError


class ContainerCreationError(PlayerCoreError):
    """The container factory rejected a creation request."""

    def __init__(self, sources: list, original_error: str):
        """
        Initialize container creation error.

        Args:
            sources: Sources the containers were requested for
            original_error: Message of the factory's exception
        """
        super().__init__(
            user_message="Could not create playback containers",
            technical_message=f"Container factory failed for sources {sources!r}: {original_error}",
            operation="create containers",
            recoverable=True,
            recovery_hint="Check the sources and call load() again",
        )
        self.sources = sources
        self.original_error = original_error


class MissingPluginError(PlayerCoreError):
    """An operation needs a plugin that is not registered."""

    def __init__(self, plugin_name: str, operation: str):
        """
        Initialize missing plugin error.

        Args:
            plugin_name: Name of the plugin that was looked up
            operation: Operation that needed it
        """
        super().__init__(
            user_message=f"Cannot {operation}: no '{plugin_name}' plugin is registered",
            operation=operation,
            recoverable=False,
            recovery_hint=f"Add a plugin named '{plugin_name}' with core.add_plugin() first",
        )
        self.plugin_name = plugin_name


class CoreDestroyedError(PlayerCoreError):
    """The core was already destroyed."""

    def __init__(self, operation: str):
        super().__init__(
            user_message=f"Cannot {operation}: the player core has been destroyed",
            operation=operation,
            recoverable=False,
        )
