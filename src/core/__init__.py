"""Core: tipos comunes, configuración y logging."""

from core.types import Snapshot, Stream

__all__ = [
    "Snapshot",
    "Stream",
]
