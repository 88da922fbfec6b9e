# strategies/volatility/bbw.py
"""
BollingerBandsWidthStrategy: BUY cuando las bandas se abren.

Ancho normalizado = (upper - lower) / close. Emite BUY si el ancho es
>= `sensitivity` y HOLD en otro caso (también cuando close == 0).

Pipeline de compute:

    snapshots -> closings ─┬─> BollingerBands ─> upper ─┐
                           │                   middle (descartada)
                           │                   lower ──┼─> operate3 ─> shift(idle, HOLD)
                           └─> skip(idle) ─────────────┘

Las bandas no producen valores durante el periodo de arranque, por eso
se descartan esos cierres (`skip`) y al final se rellena con HOLD
(`shift`) para que haya una acción por snapshot.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from loguru import logger

from core.config_loader import get_config, get_nested
from core.types import Snapshot
from data.snapshots import snapshots_as_closings, snapshots_as_dates
from features.technical_indicators import BollingerBands
from report.report import AnnotationReportColumn, NumericReportColumn, Report
from streams.arithmetic import multiply_by
from streams.fanout import duplicate
from streams.operate import operate, operate3
from streams.window import shift, skip
from strategies.action import Action, actions_to_annotations
from strategies.base import Strategy, compute_with_outcome, register_strategy


@register_strategy("bbw")
class BollingerBandsWidthStrategy(Strategy):
    def __init__(self, period: int = 20, sensitivity: float = 0.1) -> None:
        self.bollinger_bands = BollingerBands(period=period)
        self.sensitivity = sensitivity

    @classmethod
    def from_config(cls, cfg: dict[str, Any] | None = None) -> BollingerBandsWidthStrategy:
        cfg = cfg if cfg is not None else get_config()
        return cls(
            period=int(get_nested(cfg, "strategies", "bbw", "period")),
            sensitivity=float(get_nested(cfg, "strategies", "bbw", "sensitivity")),
        )

    @property
    def period(self) -> int:
        return self.bollinger_bands.period

    @property
    def name(self) -> str:
        return f"BBW({self.period},{self.sensitivity:.3f})"

    def _decide(self, upper: float, lower: float, closing: float) -> Action:
        if closing == 0:
            return Action.HOLD
        width = (upper - lower) / closing
        if width >= self.sensitivity:
            return Action.BUY
        return Action.HOLD

    def compute(self, snapshots: Iterable[Snapshot]) -> Iterator[Action]:
        idle = self.bollinger_bands.idle_period
        logger.debug(f"[BBW] {self.name}: idle_period={idle}")

        closings = duplicate(snapshots_as_closings(snapshots), 3)

        uppers, middles, lowers = self.bollinger_bands.compute(closings[0])
        middles.close()

        aligned = skip(closings[1], idle)
        actions = operate3(uppers, lowers, aligned, self._decide)

        # Con menos cierres que el arranque, shift añadiría HOLD de más:
        # se recorta a la longitud de la entrada.
        padded = shift(actions, idle, Action.HOLD)
        return operate(padded, closings[2], lambda action, _closing: action)

    def report(self, snapshots: Iterable[Snapshot]) -> Report:
        #
        # snapshots[0] -> dates
        # snapshots[1] -> closings[0] -> closings
        #                 closings[1] -> upper / middle / lower
        # snapshots[2] -> actions -> annotations
        #              -> outcomes
        #
        idle = self.bollinger_bands.idle_period
        splice = duplicate(snapshots, 3)

        dates = snapshots_as_dates(splice[0])
        closings = duplicate(snapshots_as_closings(splice[1]), 2)

        uppers, middles, lowers = self.bollinger_bands.compute(closings[1])
        uppers = shift(uppers, idle, 0.0)
        middles = shift(middles, idle, 0.0)
        lowers = shift(lowers, idle, 0.0)

        actions, outcomes = compute_with_outcome(self, splice[2])
        annotations = actions_to_annotations(actions)
        outcomes = multiply_by(outcomes, 100)

        report = Report(self.name, dates)
        outcome_chart = report.add_chart()

        report.add_column(NumericReportColumn("Close", closings[0]))
        report.add_column(NumericReportColumn("Upper", uppers))
        report.add_column(NumericReportColumn("Middle", middles))
        report.add_column(NumericReportColumn("Lower", lowers))
        report.add_column(AnnotationReportColumn(annotations))
        report.add_column(NumericReportColumn("Outcome", outcomes), outcome_chart)

        return report


__all__ = ["BollingerBandsWidthStrategy"]
