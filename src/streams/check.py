# src/streams/check.py
"""Comparación par a par de dos streams (oráculo de igualdad para tests)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

__all__ = [
    "StreamCheckError",
    "ValueMismatchError",
    "LengthMismatchError",
    "check_equals",
]


class StreamCheckError(Exception):
    """Error general de verificación de streams."""

    pass


class ValueMismatchError(StreamCheckError):
    """Los streams divergen en una posición."""

    def __init__(self, index: int, actual: Any, expected: Any) -> None:
        super().__init__(f"index {index}: actual={actual!r} expected={expected!r}")
        self.index = index
        self.actual = actual
        self.expected = expected


class LengthMismatchError(StreamCheckError):
    """Uno de los streams terminó antes que el otro."""

    def __init__(self, index: int, actual_ended: bool) -> None:
        which = "actual" if actual_ended else "expected"
        super().__init__(f"{which} ended at index {index} before the other stream")
        self.index = index
        self.actual_ended = actual_ended


_END = object()


def check_equals(actual: Iterable[Any], expected: Iterable[Any]) -> None:
    """
    Consume ambos streams en paralelo y comprueba que sean idénticos.

    Raises:
        ValueMismatchError: En la primera posición con valores distintos.
        LengthMismatchError: Si un stream se agota antes que el otro.
    """
    a = iter(actual)
    e = iter(expected)
    index = 0
    while True:
        x = next(a, _END)
        y = next(e, _END)

        if x is _END and y is _END:
            return
        if x is _END or y is _END:
            raise LengthMismatchError(index, actual_ended=x is _END)
        if x != y:
            raise ValueMismatchError(index, x, y)

        index += 1
