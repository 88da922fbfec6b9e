"""Decoradores: estrategias que envuelven a otra y filtran sus acciones."""

from strategies.decorator.delay import DelayStrategy
from strategies.decorator.noflat import NoFlatStrategy, flatness

__all__ = ["DelayStrategy", "NoFlatStrategy", "flatness"]
