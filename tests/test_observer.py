"""Tests for the generic observer manager."""

from unittest.mock import Mock

import pytest

from playercore.observer import ObserverManager
from playercore.protocols import CoreEvent, CoreObserver


@pytest.mark.unit
class TestObserverManager:
    """Test registration and notification."""

    def test_register_is_idempotent(self):
        manager = ObserverManager[CoreObserver]()
        observer = Mock(spec=CoreObserver)

        manager.register(observer)
        manager.register(observer)

        assert len(manager) == 1
        assert observer in manager

    def test_unregister_unknown_observer_is_ignored(self):
        manager = ObserverManager[CoreObserver]()
        manager.unregister(Mock(spec=CoreObserver))
        assert not manager

    def test_notify_passes_arguments(self):
        manager = ObserverManager[CoreObserver]()
        observer = Mock(spec=CoreObserver)
        manager.register(observer)

        manager.notify("on_core_event", CoreEvent.READY, extra=1)

        observer.on_core_event.assert_called_once_with(CoreEvent.READY, extra=1)

    def test_observer_exception_doesnt_break_others(self):
        manager = ObserverManager[CoreObserver]()
        bad_observer = Mock(spec=CoreObserver)
        bad_observer.on_core_event.side_effect = RuntimeError("Bad observer")
        good_observer = Mock(spec=CoreObserver)
        manager.register(bad_observer)
        manager.register(good_observer)

        manager.notify("on_core_event", CoreEvent.READY)

        bad_observer.on_core_event.assert_called_once()
        good_observer.on_core_event.assert_called_once_with(CoreEvent.READY)

    def test_observer_may_unregister_during_notify(self):
        manager = ObserverManager[CoreObserver]()
        second = Mock(spec=CoreObserver)

        class SelfRemoving:
            def on_core_event(self, event, **kwargs):
                manager.unregister(self)

        first = SelfRemoving()
        manager.register(first)
        manager.register(second)

        manager.notify("on_core_event", CoreEvent.READY)

        assert first not in manager
        second.on_core_event.assert_called_once()

    def test_clear(self):
        manager = ObserverManager[CoreObserver]()
        manager.register(Mock(spec=CoreObserver))
        manager.clear()
        assert len(manager) == 0
