# src/streams/arithmetic.py
"""
Aritmética elemento a elemento sobre streams numéricos.

Todas las funciones conservan la longitud de la entrada (map puro), salvo
`add`/`subtract`, que combinan dos streams alineados como `operate`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import math

from streams.operate import map_stream, operate

__all__ = [
    "count",
    "increment_by",
    "decrement_by",
    "multiply_by",
    "divide_by",
    "sqrt",
    "add",
    "subtract",
]

Number = int | float


def count(start: int, stream: Iterable[object]) -> Iterator[int]:
    """
    Contador acumulado: emite start, start + 1, ... (uno por elemento).

    Ejemplo: count(1, [a, b, c]) -> [1, 2, 3]
    """
    current = start - 1
    for _ in stream:
        current += 1
        yield current


def increment_by(stream: Iterable[Number], k: Number) -> Iterator[Number]:
    return map_stream(stream, lambda v: v + k)


def decrement_by(stream: Iterable[Number], k: Number) -> Iterator[Number]:
    return map_stream(stream, lambda v: v - k)


def multiply_by(stream: Iterable[Number], k: Number) -> Iterator[Number]:
    return map_stream(stream, lambda v: v * k)


def divide_by(stream: Iterable[Number], k: Number) -> Iterator[float]:
    return map_stream(stream, lambda v: v / k)


def _safe_sqrt(value: Number) -> float:
    if value < 0:
        return math.nan
    return math.sqrt(value)


def sqrt(stream: Iterable[Number]) -> Iterator[float]:
    """Raíz cuadrada elemento a elemento. Valores negativos -> NaN."""
    return map_stream(stream, _safe_sqrt)


def add(a: Iterable[Number], b: Iterable[Number]) -> Iterator[Number]:
    return operate(a, b, lambda x, y: x + y)


def subtract(a: Iterable[Number], b: Iterable[Number]) -> Iterator[Number]:
    return operate(a, b, lambda x, y: x - y)
