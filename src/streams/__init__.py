# src/streams/__init__.py
"""
Primitivas de streams para series temporales.

Un stream es un iterador de un solo paso. Las primitivas son perezosas:
no leen de la fuente hasta que alguien consume su salida.
"""

from streams.arithmetic import (
    add,
    count,
    decrement_by,
    divide_by,
    increment_by,
    multiply_by,
    sqrt,
    subtract,
)
from streams.check import (
    LengthMismatchError,
    StreamCheckError,
    ValueMismatchError,
    check_equals,
)
from streams.fanout import Branch, duplicate
from streams.operate import filter_stream, map_stream, operate, operate3
from streams.sources import slice_to_stream, stream_to_list
from streams.sync import WaitGroup, buffered, drain, waitable
from streams.window import change, first, last, shift, skip

__all__ = [
    "Branch",
    "duplicate",
    "operate",
    "operate3",
    "map_stream",
    "filter_stream",
    "shift",
    "skip",
    "first",
    "last",
    "change",
    "count",
    "increment_by",
    "decrement_by",
    "multiply_by",
    "divide_by",
    "sqrt",
    "add",
    "subtract",
    "drain",
    "buffered",
    "waitable",
    "WaitGroup",
    "check_equals",
    "StreamCheckError",
    "ValueMismatchError",
    "LengthMismatchError",
    "slice_to_stream",
    "stream_to_list",
]
