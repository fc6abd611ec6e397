"""Publish/subscribe bus for cross-instance signaling.

The bus is injected into each Core rather than being a process-wide
singleton. Each Core talks to it through a ScopedChannel that prefixes topics
with its player id, so several widgets on one bus never cross-signal.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from playercore.protocols import PlayerEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[Any], None]


class Mediator:
    """Topic-keyed publish/subscribe bus."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscriber]] = defaultdict(list)

    def subscribe(self, topic: str, callback: Subscriber) -> None:
        if callback not in self._subscribers[topic]:
            self._subscribers[topic].append(callback)

    def unsubscribe(self, topic: str, callback: Subscriber) -> None:
        callbacks = self._subscribers.get(topic, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def trigger(self, topic: str, payload: Any = None) -> None:
        """
        Deliver ``payload`` to every subscriber of ``topic``.

        Error Handling:
            A failing subscriber is logged and does not stop delivery to the others.
        """
        for callback in list(self._subscribers.get(topic, [])):
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"Error delivering '{topic}' to {callback}: {e}", exc_info=True)

    def scoped(self, player_id: str | Callable[[], str]) -> "ScopedChannel":
        return ScopedChannel(self, player_id)


class ScopedChannel:
    """
    A Mediator handle that publishes ``"<player_id>:<event>"`` topics.

    ``player_id`` may be a callable; it is then resolved on every publish so
    the topic follows a player id that changes after construction.
    """

    def __init__(self, mediator: Mediator, player_id: str | Callable[[], str]):
        self.mediator = mediator
        self._player_id = player_id

    @property
    def player_id(self) -> str:
        if callable(self._player_id):
            return self._player_id()
        return self._player_id

    def topic(self, event: PlayerEvent) -> str:
        return f"{self.player_id}:{event.value}"

    def trigger(self, event: PlayerEvent, payload: Any = None) -> None:
        self.mediator.trigger(self.topic(event), payload)

    def subscribe(self, event: PlayerEvent, callback: Subscriber) -> None:
        self.mediator.subscribe(self.topic(event), callback)

    def unsubscribe(self, event: PlayerEvent, callback: Subscriber) -> None:
        self.mediator.unsubscribe(self.topic(event), callback)
