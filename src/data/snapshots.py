"""Extracción de columnas de un stream de snapshots."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime

from core.types import Snapshot
from streams.operate import map_stream

__all__ = [
    "snapshots_as_dates",
    "snapshots_as_opens",
    "snapshots_as_highs",
    "snapshots_as_lows",
    "snapshots_as_closings",
    "snapshots_as_volumes",
]


def snapshots_as_dates(snapshots: Iterable[Snapshot]) -> Iterator[datetime]:
    return map_stream(snapshots, lambda s: s.date)


def snapshots_as_opens(snapshots: Iterable[Snapshot]) -> Iterator[float]:
    return map_stream(snapshots, lambda s: s.open)


def snapshots_as_highs(snapshots: Iterable[Snapshot]) -> Iterator[float]:
    return map_stream(snapshots, lambda s: s.high)


def snapshots_as_lows(snapshots: Iterable[Snapshot]) -> Iterator[float]:
    return map_stream(snapshots, lambda s: s.low)


def snapshots_as_closings(snapshots: Iterable[Snapshot]) -> Iterator[float]:
    return map_stream(snapshots, lambda s: s.close)


def snapshots_as_volumes(snapshots: Iterable[Snapshot]) -> Iterator[float]:
    return map_stream(snapshots, lambda s: s.volume)
