# src/core/types.py
"""
Tipos comunes del pipeline de streams.

- `Stream`: alias de un iterador de un solo paso (finito o infinito).
- `Snapshot`: una observación de precio de un activo en una fecha.

Un stream tiene exactamente un productor y un consumidor lógico. Para que
varios consumidores lean la misma secuencia hay que duplicarlo de forma
explícita con `streams.duplicate`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import TypeVar

T = TypeVar("T")

# Un stream se "cierra" cuando el iterador se agota (StopIteration).
Stream = Iterator

__all__ = ["T", "Stream", "Snapshot"]


@dataclass(frozen=True)
class Snapshot:
    """
    Observación OHLCV de un activo.

    Atributos
    ---------
    date : datetime
        Fecha de la observación.
    open, high, low, close : float
        Precios de la sesión. El núcleo solo usa `close`.
    adj_close : float
        Cierre ajustado (opcional en los CSV).
    volume : float
        Volumen negociado.
    """

    date: datetime
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    adj_close: float = 0.0
    volume: float = 0.0
