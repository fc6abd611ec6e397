"""Player core: orchestrator and its sub-components."""

from .containers import ContainerLifecycleManager
from .core import MEDIA_CONTROL, Core
from .fullscreen import FullscreenController
from .plugins import PluginRegistry
from .size_tracker import SizeTracker

__all__ = [
    "MEDIA_CONTROL",
    "ContainerLifecycleManager",
    "Core",
    "FullscreenController",
    "PluginRegistry",
    "SizeTracker",
]
