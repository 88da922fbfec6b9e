# strategies/decorator/noflat.py
"""
NoFlatStrategy: evita operar cuando el mercado está plano.

Mantiene una ventana deslizante con los últimos `period` cierres y mide
la planitud como

    (max - min) / media * 100

El mercado está "plano" si la medida queda por debajo de `threshold`
(en porcentaje). Mientras la ventana no está llena se considera NO plano y
la acción interna pasa sin cambios. Con la ventana llena: plano -> HOLD;
no plano -> acción interna.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from loguru import logger
import numpy as np

from core.config_loader import get_config, get_nested
from core.types import Snapshot
from data.snapshots import snapshots_as_closings
from report.report import NumericReportColumn, Report
from streams.fanout import duplicate
from streams.operate import operate
from strategies.action import Action
from strategies.base import Strategy, default_report


def flatness(closings: Sequence[float]) -> float:
    """
    Medida de planitud (%) de una ventana de cierres.

    Una media 0 da `inf` si hay rango y 0 si todos los valores son 0.
    """
    window = np.asarray(closings, dtype=float)
    price_range = float(window.max() - window.min())
    mean = float(window.mean())
    if mean == 0:
        return 0.0 if price_range == 0 else float("inf")
    return price_range / mean * 100


class NoFlatStrategy(Strategy):
    """
    Atributos
    ---------
    period : int
        Tamaño de la ventana de cierres.
    threshold : float
        Umbral de planitud en porcentaje (1.0 == 1%).
    inner_strategy : Strategy
        Estrategia decorada.
    """

    def __init__(self, period: int, threshold: float, inner_strategy: Strategy) -> None:
        if period < 1:
            raise ValueError(f"NoFlatStrategy: period debe ser >= 1 (recibido {period})")
        self.period = period
        self.threshold = threshold
        self.inner_strategy = inner_strategy

    @classmethod
    def from_config(
        cls, inner_strategy: Strategy, cfg: dict[str, Any] | None = None
    ) -> NoFlatStrategy:
        cfg = cfg if cfg is not None else get_config()
        return cls(
            int(get_nested(cfg, "strategies", "noflat", "period")),
            float(get_nested(cfg, "strategies", "noflat", "threshold")),
            inner_strategy,
        )

    @property
    def name(self) -> str:
        return f"NoFlat({self.period},{self.threshold:.0f},{self.inner_strategy.name})"

    def _measures(self, closings: Iterable[float]) -> Iterator[float | None]:
        """Planitud por paso; None mientras la ventana no está llena."""
        window: deque[float] = deque(maxlen=self.period)
        for closing in closings:
            window.append(closing)
            if len(window) < self.period:
                yield None
            else:
                yield flatness(window)

    def compute(self, snapshots: Iterable[Snapshot]) -> Iterator[Action]:
        logger.debug(
            f"[NoFlatStrategy] {self.name}: period={self.period} threshold={self.threshold}"
        )
        splice = duplicate(snapshots, 2)

        inner_actions = self.inner_strategy.compute(splice[0])
        measures = self._measures(snapshots_as_closings(splice[1]))

        def _filter(action: Action, measure: float | None) -> Action:
            if measure is not None and measure < self.threshold:
                return Action.HOLD
            return action

        return operate(inner_actions, measures, _filter)

    def flatness_measures(self, snapshots: Iterable[Snapshot]) -> Iterator[float]:
        """Medida de planitud por snapshot (0 durante el arranque), para informes."""
        for measure in self._measures(snapshots_as_closings(snapshots)):
            yield 0.0 if measure is None else measure

    def report(self, snapshots: Iterable[Snapshot]) -> Report:
        splice = duplicate(snapshots, 2)

        report = default_report(self, splice[0])
        report.add_column(NumericReportColumn("Flatness", self.flatness_measures(splice[1])))

        return report


__all__ = ["NoFlatStrategy", "flatness"]
