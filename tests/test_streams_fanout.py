"""
Tests de duplicate (fan-out).

Cobertura principal:
- Todas las ramas reciben todos los elementos en orden.
- La fuente se lee una sola vez por elemento.
- Las ramas se consumen a ritmos distintos.
- Desenganchar una rama con close().
"""

from __future__ import annotations

import threading

import pytest

from streams import duplicate, slice_to_stream


def _counting_source(values, reads):
    for v in values:
        reads.append(v)
        yield v


def test_duplicate_delivers_everything_to_every_branch():
    branches = duplicate(slice_to_stream([1, 2, 3]), 3)
    assert [list(b) for b in branches] == [[1, 2, 3]] * 3


def test_duplicate_reads_source_once_per_element():
    reads: list[int] = []
    a, b = duplicate(_counting_source([1, 2, 3, 4], reads), 2)

    assert list(a) == [1, 2, 3, 4]
    assert list(b) == [1, 2, 3, 4]
    assert reads == [1, 2, 3, 4]


def test_branches_consumed_at_different_rates():
    fast, slow = duplicate(range(5), 2)

    assert next(fast) == 0
    assert next(fast) == 1
    assert next(fast) == 2
    assert slow.pending == 3

    assert next(slow) == 0
    assert list(fast) == [3, 4]
    assert list(slow) == [1, 2, 3, 4]


def test_duplicate_single_output_is_passthrough():
    (only,) = duplicate(iter("abc"), 1)
    assert list(only) == ["a", "b", "c"]


@pytest.mark.parametrize("count", [0, -3])
def test_duplicate_rejects_invalid_count(count):
    with pytest.raises(ValueError):
        duplicate([1, 2], count)


def test_closed_branch_stops_buffering():
    used, unused = duplicate(range(100), 2)
    unused.close()

    assert sum(used) == sum(range(100))
    assert unused.pending == 0
    assert list(unused) == []


def test_branches_from_multiple_threads():
    values = list(range(500))
    branches = duplicate(values, 4)
    results: list[list[int]] = [[] for _ in branches]

    def _consume(i):
        results[i].extend(branches[i])

    threads = [threading.Thread(target=_consume, args=(i,)) for i in range(len(branches))]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert all(r == values for r in results)


def _failing_source():
    yield 1
    yield 2
    raise RuntimeError("fuente rota")


def test_source_error_reaches_every_branch():
    a, b = duplicate(_failing_source(), 2)

    with pytest.raises(RuntimeError):
        list(a)

    # b recibe lo ya leído y después el mismo error (no un cierre limpio)
    assert next(b) == 1
    assert next(b) == 2
    with pytest.raises(RuntimeError, match="fuente rota"):
        next(b)


def test_pending_while_other_thread_consumes():
    fast, slow = duplicate(range(1000), 2)
    seen: list[int] = []

    def _consume():
        for _ in fast:
            seen.append(slow.pending)

    t = threading.Thread(target=_consume)
    t.start()
    t.join(timeout=5)

    assert seen[-1] == 1000
    assert list(slow) == list(range(1000))
    assert slow.pending == 0
