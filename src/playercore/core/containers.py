"""Container lifecycle management."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, Optional

from playercore.exceptions import ContainerCreationError
from playercore.models import CoreOptions
from playercore.protocols import Container, ContainerEvent, ContainerFactory

logger = logging.getLogger(__name__)


class ContainerLifecycleManager:
    """
    Creates, tracks and tears down containers.

    Tracking:
        Containers are kept in creation order. For each tracked container the
        manager holds a subscription in a registry keyed by container
        identity; the subscription is dropped when the container reports
        ``ContainerEvent.DESTROYED`` or is removed, whichever comes first.

    Generations:
        Every creation request is tagged with a generation number. Only the
        latest generation is current; results of an older request that
        finish late are destroyed instead of installed.
    """

    def __init__(
        self,
        factory: ContainerFactory,
        on_removed: Optional[Callable[[Container], None]] = None,
    ):
        """
        Args:
            factory: Builds containers from the configured sources
            on_removed: Called with each container after it stops being tracked
        """
        self.factory = factory
        self._on_removed = on_removed
        self._containers: list[Container] = []
        self._subscriptions: dict[int, Container] = {}
        self._generation = 0
        self._superseded: dict[int, asyncio.Event] = {}

    @property
    def containers(self) -> list[Container]:
        """Tracked containers, in creation order (a copy)."""
        return list(self._containers)

    @property
    def generation(self) -> int:
        return self._generation

    def begin_generation(self) -> int:
        """Start a new creation request; earlier requests become stale."""
        for event in self._superseded.values():
            event.set()
        self._superseded.clear()
        self._generation += 1
        self._superseded[self._generation] = asyncio.Event()
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def create_all(self, options: CoreOptions) -> list[Container]:
        """
        Ask the factory for the containers described by ``options``.

        Raises:
            ContainerCreationError: If the factory fails (never retried)
        """
        try:
            containers = await self.factory.create_containers(options)
        except Exception as e:
            logger.error(f"Container factory failed: {e}")
            raise ContainerCreationError(list(options.sources), str(e)) from e
        logger.info(f"Factory created {len(containers)} container(s)")
        return list(containers)

    def create_one(self, source: Any, options: CoreOptions) -> Container:
        """Create one container synchronously and track it."""
        try:
            container = self.factory.create_container(source, options)
        except Exception as e:
            logger.error(f"Container factory failed for {source!r}: {e}")
            raise ContainerCreationError([source], str(e)) from e
        self.append_container(container)
        return container

    def append_container(self, container: Container) -> None:
        """Track ``container`` and subscribe to its destruction."""
        key = id(container)
        if key not in self._subscriptions:
            container.register_observer(self)
            self._subscriptions[key] = container
        self._containers.append(container)

    def remove_container(self, container: Container) -> None:
        """Stop tracking ``container``. A no-op for untracked containers."""
        subscribed = self._subscriptions.pop(id(container), None)
        if subscribed is not None:
            subscribed.unregister_observer(self)

        if not any(c is container for c in self._containers):
            return
        self._containers = [c for c in self._containers if c is not container]
        logger.debug(f"Removed container {container}")
        if self._on_removed:
            self._on_removed(container)

    def on_container_event(self, event: ContainerEvent, container: Container) -> None:
        """ContainerObserver callback."""
        if event == ContainerEvent.DESTROYED:
            self.remove_container(container)

    async def wait_all_ready(
        self, containers: Sequence[Container], generation: Optional[int] = None
    ) -> bool:
        """
        Wait until every container in ``containers`` has signaled readiness.

        With a ``generation``, the wait also ends as soon as that generation
        is superseded, since its containers may be destroyed before they
        ever become ready.

        Returns:
            True if every container is ready, False if the generation was
            superseded first
        """
        if generation is not None and not self.is_current(generation):
            return False
        if not containers:
            return True

        barrier = asyncio.gather(*(container.wait_ready() for container in containers))
        if generation is None:
            await barrier
            logger.debug(f"{len(containers)} container(s) ready")
            return True

        superseded = asyncio.ensure_future(
            self._superseded.setdefault(generation, asyncio.Event()).wait()
        )
        try:
            await asyncio.wait({barrier, superseded}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            barrier.cancel()
            raise
        finally:
            superseded.cancel()

        if not barrier.done():
            barrier.cancel()
            logger.debug(f"Generation {generation} superseded while waiting for readiness")
            return False
        barrier.result()
        logger.debug(f"{len(containers)} container(s) ready")
        return True

    def destroy_all(self) -> None:
        """Destroy every tracked container; the tracked sequence ends up empty."""
        containers = list(self._containers)
        for container in containers:
            container.destroy()
            self.remove_container(container)
        if containers:
            logger.info(f"Destroyed {len(containers)} container(s)")

    def discard(self, containers: Sequence[Container]) -> None:
        """Destroy containers that were created but never tracked."""
        for container in containers:
            container.destroy()

    def __len__(self) -> int:
        return len(self._containers)

    def __contains__(self, container: object) -> bool:
        return any(c is container for c in self._containers)
