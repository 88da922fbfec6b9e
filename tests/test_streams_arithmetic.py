from __future__ import annotations

import math

import pytest

from streams import (
    add,
    check_equals,
    count,
    decrement_by,
    divide_by,
    increment_by,
    multiply_by,
    slice_to_stream,
    sqrt,
    subtract,
)


def test_count():
    check_equals(count(1, slice_to_stream([1, 1, 1, 1])), [1, 2, 3, 4])


def test_count_from_arbitrary_seed():
    out = list(count(10, "abcde"))
    assert out == [10 + i for i in range(5)]


def test_count_empty_stream():
    assert list(count(1, [])) == []


def test_decrement_by():
    check_equals(decrement_by(slice_to_stream([2, 3, 4, 5]), 1), [1, 2, 3, 4])


def test_increment_and_multiply():
    assert list(increment_by([1, 2], 2)) == [3, 4]
    assert list(multiply_by([0.5, 2.0, -1.0], 100)) == [50.0, 200.0, -100.0]
    assert list(divide_by([10, 5], 2)) == [5.0, 2.5]


def test_sqrt():
    check_equals(sqrt(slice_to_stream([9, 81, 16, 100])), [3, 9, 4, 10])


def test_sqrt_negative_is_nan():
    out = list(sqrt([4, -1, 0]))
    assert out[0] == 2.0
    assert math.isnan(out[1])
    assert out[2] == 0.0


def test_add_and_subtract_stop_at_shortest():
    assert list(add([1, 2, 3], [10, 20])) == [11, 22]
    assert list(subtract([5, 5, 5], [1, 2, 3])) == [4, 3, 2]


def test_arithmetic_is_lazy():
    def _boom():
        raise RuntimeError("no debería leerse")
        yield 0  # pragma: no cover

    stream = multiply_by(_boom(), 2)
    with pytest.raises(RuntimeError):
        next(stream)
