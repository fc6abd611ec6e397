"""Data models for the player core."""

from .config import CoreOptions
from .size import Dimension, PlayerInfo, Size, is_number

__all__ = [
    "CoreOptions",
    "Dimension",
    "PlayerInfo",
    "Size",
    "is_number",
]
