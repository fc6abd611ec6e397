"""Pytest fixtures for tests."""

from unittest.mock import Mock

import pytest
import pytest_asyncio

from playercore import Core, Document, Element, FullscreenPlatform, Mediator
from playercore.protocols import CoreEvent, CoreObserver
from playercore.sandbox import SandboxContainerFactory


@pytest.fixture
def factory():
    """Factory whose containers become ready immediately."""
    return SandboxContainerFactory()


@pytest.fixture
def document():
    """Document with a 1920x1080 viewport."""
    return Document(viewport_width=1920, viewport_height=1080)


@pytest.fixture
def platform(document):
    """Platform with native fullscreen support."""
    return FullscreenPlatform(document)


@pytest.fixture
def mediator():
    return Mediator()


@pytest.fixture
def parent():
    """Element the player gets attached to."""
    return Element("body")


@pytest.fixture
def core_options(parent):
    return {
        "player_id": "player-1",
        "sources": ["intro.mp4", "movie.mp4"],
        "width": 640,
        "height": 360,
        "parent_element": parent,
        "hide_media_control_delay": 2.0,
    }


@pytest_asyncio.fixture
async def core(core_options, factory, platform, mediator):
    """Core wired to sandbox collaborators; destroyed after the test."""
    core = Core(core_options, factory, platform=platform, mediator=mediator)
    yield core
    if not core.destroyed:
        core.destroy()


@pytest.fixture
def observer():
    """Mock core observer."""
    return Mock(spec=CoreObserver)


def emitted(observer, event: CoreEvent | None = None) -> list:
    """Events (or kwargs of one event type) received by a mock core observer."""
    calls = observer.on_core_event.call_args_list
    if event is None:
        return [c.args[0] for c in calls]
    return [c.kwargs for c in calls if c.args[0] == event]
