# src/streams/sources.py
"""Fuentes y sumideros finitos (útiles en tests y fixtures)."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from core.types import T

__all__ = ["slice_to_stream", "stream_to_list"]


def slice_to_stream(values: Iterable[T]) -> Iterator[T]:
    """Stream de un solo paso sobre una copia de `values`."""
    return iter(list(values))


def stream_to_list(stream: Iterable[T]) -> list[T]:
    return list(stream)
