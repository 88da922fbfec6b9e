# src/features/technical_indicators.py
"""
Indicadores técnicos sobre streams.

Indicadores implementados:
- Medias móviles: MovingSum, Sma
- Volatilidad: MovingStd, BollingerBands

Contrato común (`Indicator`):
- compute(values) -> uno o más streams derivados.
- idle_period -> número de elementos iniciales de la entrada que no
  producen salida. Cada salida tiene len(values) - idle_period elementos,
  así que quien combine la salida con la serie original debe aplicar
  `skip` a la original o `shift` a la salida.

Diseño:
- Cálculo incremental con ventanas `deque` (implementación pura Python).
- Sin estado entre llamadas: cada compute() crea sus propias ventanas.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from typing import Protocol

from streams.fanout import duplicate
from streams.operate import operate

__all__ = ["Indicator", "MovingSum", "Sma", "MovingStd", "BollingerBands"]


class Indicator(Protocol):
    @property
    def idle_period(self) -> int: ...


def _check_period(name: str, period: int) -> None:
    if period < 1:
        raise ValueError(f"{name}: period debe ser >= 1 (recibido {period})")


class MovingSum:
    """Suma de los últimos `period` valores."""

    def __init__(self, period: int = 20) -> None:
        _check_period("MovingSum", period)
        self.period = period

    @property
    def idle_period(self) -> int:
        return self.period - 1

    def compute(self, values: Iterable[float]) -> Iterator[float]:
        window: deque[float] = deque()
        total = 0.0
        for value in values:
            window.append(value)
            total += value
            if len(window) > self.period:
                total -= window.popleft()
            if len(window) == self.period:
                yield total


class Sma:
    """Simple Moving Average."""

    def __init__(self, period: int = 20) -> None:
        _check_period("Sma", period)
        self.period = period

    @property
    def idle_period(self) -> int:
        return self.period - 1

    def compute(self, values: Iterable[float]) -> Iterator[float]:
        for total in MovingSum(self.period).compute(values):
            yield total / self.period


class MovingStd:
    """Desviación estándar poblacional de los últimos `period` valores."""

    def __init__(self, period: int = 20) -> None:
        _check_period("MovingStd", period)
        self.period = period

    @property
    def idle_period(self) -> int:
        return self.period - 1

    def compute(self, values: Iterable[float]) -> Iterator[float]:
        window: deque[float] = deque(maxlen=self.period)
        for value in values:
            window.append(value)
            if len(window) < self.period:
                continue
            middle = sum(window) / self.period
            variance = sum((x - middle) ** 2 for x in window) / self.period
            yield variance**0.5


class BollingerBands:
    """
    Bollinger Bands (upper, middle, lower).

    middle = SMA(period)
    upper  = middle + k * std
    lower  = middle - k * std
    """

    def __init__(self, period: int = 20, k: float = 2.0) -> None:
        _check_period("BollingerBands", period)
        self.period = period
        self.k = k

    @property
    def idle_period(self) -> int:
        return self.period - 1

    def compute(
        self, values: Iterable[float]
    ) -> tuple[Iterator[float], Iterator[float], Iterator[float]]:
        inputs = duplicate(values, 2)
        middles = duplicate(Sma(self.period).compute(inputs[0]), 3)
        stds = duplicate(MovingStd(self.period).compute(inputs[1]), 2)

        uppers = operate(middles[0], stds[0], lambda m, s: m + self.k * s)
        lowers = operate(middles[2], stds[1], lambda m, s: m - self.k * s)

        return uppers, middles[1], lowers
