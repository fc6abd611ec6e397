"""Generic observer list.

Every notifying component in playercore (Core, the container lifecycle
manager, sandbox containers) keeps its listeners in an ObserverManager
instead of duplicating register/unregister/notify code.

The whole core runs on one asyncio event loop, so there is no locking here:
notifications are delivered synchronously, in registration order, before
``notify`` returns.
"""

import logging
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Ordered observer list with isolated notification.

    Type Parameters:
        T: The observer protocol type (e.g., CoreObserver, ContainerObserver)

    Example:
        ```python
        class MyComponent:
            def __init__(self):
                self._observers = ObserverManager[CoreObserver](observer_type_name="core")

            def register_observer(self, observer: CoreObserver) -> None:
                self._observers.register(observer)

            def _emit(self, event: CoreEvent, **kwargs) -> None:
                self._observers.notify("on_core_event", event, **kwargs)
        ```
    """

    def __init__(self, observer_type_name: str = "observer"):
        """
        Initialize the observer manager.

        Args:
            observer_type_name: Name of the observer type for logging (e.g., "core", "container")
        """
        self._observers: list[T] = []
        self._observer_type_name = observer_type_name

    def register(self, observer: T) -> None:
        """
        Register an observer (idempotent - won't add duplicates).

        Args:
            observer: The observer to register
        """
        if observer not in self._observers:
            self._observers.append(observer)
            logger.debug(f"Registered {self._observer_type_name} observer: {observer}")
        else:
            logger.debug(f"{self._observer_type_name} observer already registered: {observer}")

    def unregister(self, observer: T) -> None:
        """
        Unregister an observer. Unknown observers are ignored.

        Args:
            observer: The observer to unregister
        """
        if observer in self._observers:
            self._observers.remove(observer)
            logger.debug(f"Unregistered {self._observer_type_name} observer: {observer}")
        else:
            logger.debug(
                f"Attempted to unregister unknown {self._observer_type_name} observer: {observer}"
            )

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Notify all observers by calling their callback method.

        The observer list is copied first, so observers may register or
        unregister (themselves or others) while being notified.

        Args:
            callback_name: Name of the callback method to call (e.g., 'on_core_event')
            *args: Positional arguments to pass to the callback
            **kwargs: Keyword arguments to pass to the callback

        Error Handling:
            Exceptions in observer callbacks are logged but don't affect other observers.
        """
        for observer in list(self._observers):
            try:
                callback = getattr(observer, callback_name)
                callback(*args, **kwargs)
            except AttributeError:
                logger.error(
                    f"{self._observer_type_name} observer {observer} has no method '{callback_name}'",
                    exc_info=True,
                )
            except Exception as e:
                logger.error(
                    f"Error notifying {self._observer_type_name} observer {observer} via {callback_name}: {e}",
                    exc_info=True,
                )

    def clear(self) -> None:
        """Remove all registered observers."""
        count = len(self._observers)
        self._observers.clear()
        if count > 0:
            logger.debug(f"Cleared {count} {self._observer_type_name} observer(s)")

    def __contains__(self, observer: T) -> bool:
        return observer in self._observers

    def __len__(self) -> int:
        return len(self._observers)

    def __bool__(self) -> bool:
        return len(self._observers) > 0
