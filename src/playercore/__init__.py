"""playercore: orchestration core of an embeddable media-player widget."""

__version__ = "0.1.0"

from .core import Core
from .element import Element
from .mediator import Mediator
from .models import CoreOptions, PlayerInfo, Size
from .screen import Document, FullscreenPlatform

__all__ = [
    "Core",
    "CoreOptions",
    "Document",
    "Element",
    "FullscreenPlatform",
    "Mediator",
    "PlayerInfo",
    "Size",
]
