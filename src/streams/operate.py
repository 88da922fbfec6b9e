# src/streams/operate.py
"""Combinación (zip estricto) y transformación elemento a elemento."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
R = TypeVar("R")

__all__ = ["operate", "operate3", "map_stream", "filter_stream"]


def operate(a: Iterable[A], b: Iterable[B], fn: Callable[[A, B], R]) -> Iterator[R]:
    """
    Aplica `fn` a cada par (a[i], b[i]) de dos streams ya alineados.

    Lee un elemento de cada entrada por paso y termina en cuanto cualquiera
    de ellas se agota; un elemento ya leído sin pareja se descarta.
    La longitud de salida es min(len(a), len(b)).
    """
    for x, y in zip(a, b):
        yield fn(x, y)


def operate3(
    a: Iterable[A],
    b: Iterable[B],
    c: Iterable[C],
    fn: Callable[[A, B, C], R],
) -> Iterator[R]:
    """Versión de `operate` para tres streams alineados."""
    for x, y, z in zip(a, b, c):
        yield fn(x, y, z)


def map_stream(stream: Iterable[A], fn: Callable[[A], R]) -> Iterator[R]:
    for value in stream:
        yield fn(value)


def filter_stream(stream: Iterable[A], predicate: Callable[[A], bool]) -> Iterator[A]:
    # Cambia la longitud: no usar sobre series que deban seguir alineadas.
    for value in stream:
        if predicate(value):
            yield value
