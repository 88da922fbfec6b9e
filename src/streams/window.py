# src/streams/window.py
"""
Transformaciones que cambian la longitud de un stream para mantener
alineadas las series derivadas con su fuente.

- shift:  antepone `n` valores de relleno (recupera el periodo de arranque).
- skip:   descarta los `n` primeros (descarta lo que el indicador no cubre).
- first:  se queda con los `n` primeros.
- last:   se queda con los `n` últimos.
- change: diferencia con el valor de `n` posiciones atrás.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from typing import Any

from core.types import T

__all__ = ["shift", "skip", "first", "last", "change"]


def _check_count(name: str, n: int) -> None:
    if n < 0:
        raise ValueError(f"{name}: n debe ser >= 0 (recibido {n})")


def shift(stream: Iterable[T], n: int, fill: T) -> Iterator[T]:
    """Emite `n` copias de `fill` y después la secuencia original."""
    _check_count("shift", n)
    return _shift(stream, n, fill)


def _shift(stream: Iterable[T], n: int, fill: T) -> Iterator[T]:
    for _ in range(n):
        yield fill
    yield from stream


def skip(stream: Iterable[T], n: int) -> Iterator[T]:
    """Descarta los `n` primeros elementos y deja pasar el resto."""
    _check_count("skip", n)
    return _skip(stream, n)


def _skip(stream: Iterable[T], n: int) -> Iterator[T]:
    it = iter(stream)
    for _ in range(n):
        try:
            next(it)
        except StopIteration:
            return
    yield from it


def first(stream: Iterable[T], n: int) -> Iterator[T]:
    """
    Emite los `n` primeros elementos.

    No lee de la fuente más allá del elemento `n`.
    """
    _check_count("first", n)
    return _first(stream, n)


def _first(stream: Iterable[T], n: int) -> Iterator[T]:
    if n == 0:
        return
    for i, value in enumerate(stream, start=1):
        yield value
        if i >= n:
            return


def last(stream: Iterable[T], n: int) -> Iterator[T]:
    """
    Emite los `n` últimos elementos del stream.

    Si la fuente tiene menos de `n` elementos se emiten todos (sin relleno).
    Necesita consumir la fuente completa antes de emitir nada.
    """
    _check_count("last", n)
    return _last(stream, n)


def _last(stream: Iterable[T], n: int) -> Iterator[T]:
    window: deque[T] = deque(stream, maxlen=n)
    yield from window


def change(stream: Iterable[Any], n: int) -> Iterator[Any]:
    """
    Para cada posición i >= n emite value[i] - value[i - n].

    Los `n` primeros elementos solo llenan la ventana: la salida tiene
    len(stream) - n elementos.
    """
    _check_count("change", n)
    return _change(stream, n)


def _change(stream: Iterable[Any], n: int) -> Iterator[Any]:
    window: deque[Any] = deque(maxlen=n + 1)
    for value in stream:
        window.append(value)
        if len(window) > n:
            yield value - window[0]
