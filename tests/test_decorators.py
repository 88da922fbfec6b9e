"""
Tests de los decoradores DelayStrategy y NoFlatStrategy.
"""

from __future__ import annotations

import threading

import pytest

from strategies import Action, DelayStrategy, NoFlatStrategy, flatness
from strategy_helpers import B, H, S, CannedStrategy, make_snapshots

# ---------------------------------------------------------------------------
# DelayStrategy
# ---------------------------------------------------------------------------


def test_delay_holds_first_period_outputs():
    inner = CannedStrategy("inner", [B, S, B, S, B, S])
    delay = DelayStrategy(3, inner)

    actions = list(delay.compute(make_snapshots([1.0] * 6)))

    assert actions == [H, H, H, S, B, S]
    assert delay.name == "D(inner)"


def test_delay_zero_is_passthrough():
    inner = CannedStrategy("inner", [B, S, H])
    assert list(DelayStrategy(0, inner).compute(make_snapshots([1.0] * 3))) == [B, S, H]


def test_delay_longer_than_input():
    inner = CannedStrategy("inner", [B, B])
    assert list(DelayStrategy(5, inner).compute(make_snapshots([1.0, 2.0]))) == [H, H]


def test_delay_negative_period_fails():
    with pytest.raises(ValueError):
        DelayStrategy(-1, CannedStrategy("x", []))


def test_delay_from_config():
    cfg = {"strategies": {"delay": {"period": 2}}}
    delay = DelayStrategy.from_config(CannedStrategy("x", []), cfg)
    assert delay.period == 2


# ---------------------------------------------------------------------------
# NoFlatStrategy
# ---------------------------------------------------------------------------


def test_flatness_measure():
    assert flatness([100.0, 100.0, 100.0]) == 0.0
    # rango 20, media 100 -> 20%
    assert flatness([90.0, 100.0, 110.0]) == pytest.approx(20.0)


def test_noflat_suppresses_constant_prices():
    inner = CannedStrategy("inner", [B, S, B, S, B, S])
    noflat = NoFlatStrategy(3, 1.0, inner)

    actions = list(noflat.compute(make_snapshots([50.0] * 6)))

    # Las 2 primeras posiciones son arranque (no plano): pasa la acción interna.
    assert actions == [B, S, H, H, H, H]


def test_noflat_never_suppresses_strong_trend():
    inner = CannedStrategy("inner", [B, S, B, S, B, S])
    noflat = NoFlatStrategy(3, 1.0, inner)

    actions = list(noflat.compute(make_snapshots([100.0, 110.0, 121.0, 133.0, 146.0, 161.0])))
    assert actions == [B, S, B, S, B, S]


def test_noflat_window_slides():
    inner = CannedStrategy("inner", [B] * 6)
    noflat = NoFlatStrategy(3, 1.0, inner)

    # Ventana [100, 100, 120] no es plana; [100, 120, 120] tampoco;
    # [120, 120, 120] sí lo es.
    closings = [100.0, 100.0, 120.0, 120.0, 120.0, 130.0]
    actions = list(noflat.compute(make_snapshots(closings)))

    assert actions == [B, B, B, B, H, B]


def test_noflat_terminates_with_inner():
    inner = CannedStrategy("inner", [B, B])
    actions = list(NoFlatStrategy(2, 1.0, inner).compute(make_snapshots([1.0, 2.0, 3.0])))
    assert actions == [B, B]


def test_noflat_name_and_validation():
    inner = CannedStrategy("inner", [])
    assert NoFlatStrategy(20, 1.4, inner).name == "NoFlat(20,1,inner)"
    with pytest.raises(ValueError):
        NoFlatStrategy(0, 1.0, inner)


def test_noflat_flatness_measures_for_report():
    noflat = NoFlatStrategy(2, 1.0, CannedStrategy("inner", []))
    measures = list(noflat.flatness_measures(make_snapshots([100.0, 100.0, 110.0])))

    assert measures[0] == 0.0
    assert measures[1] == 0.0
    assert measures[2] == pytest.approx(10.0 / 105.0 * 100)


def test_noflat_from_config():
    cfg = {"strategies": {"noflat": {"period": 7, "threshold": 2.5}}}
    noflat = NoFlatStrategy.from_config(CannedStrategy("x", []), cfg)
    assert (noflat.period, noflat.threshold) == (7, 2.5)


def test_decorators_compose():
    inner = CannedStrategy("inner", [Action.BUY] * 6)
    composed = DelayStrategy(1, NoFlatStrategy(2, 1.0, inner))

    actions = list(composed.compute(make_snapshots([10.0, 10.0, 10.0, 12.0, 15.0, 15.0])))
    assert actions == [H, H, H, B, B, H]


# ---------------------------------------------------------------------------
# Llamadas concurrentes sobre la misma instancia
# ---------------------------------------------------------------------------


def _compute_in_threads(strategy, closings, n_threads=4):
    results: list[list[Action]] = [[] for _ in range(n_threads)]

    def _run(i):
        results[i].extend(strategy.compute(make_snapshots(closings)))

    threads = [threading.Thread(target=_run, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    return results


def test_delay_concurrent_compute_keeps_separate_counters():
    inner = CannedStrategy("inner", [B, S] * 50)
    delay = DelayStrategy(10, inner)

    expected = [H] * 10 + ([B, S] * 50)[10:]
    results = _compute_in_threads(delay, [1.0] * 100)

    assert all(r == expected for r in results)


def test_noflat_concurrent_compute_keeps_separate_windows():
    inner = CannedStrategy("inner", [B] * 60)
    noflat = NoFlatStrategy(5, 1.0, inner)
    closings = [100.0] * 30 + [100.0, 120.0] * 15

    expected = list(noflat.compute(make_snapshots(closings)))
    results = _compute_in_threads(noflat, closings)

    assert expected[:4] == [B] * 4
    assert expected[4:30] == [H] * 26
    assert all(r == expected for r in results)
