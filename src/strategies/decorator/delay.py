# strategies/decorator/delay.py
"""
DelayStrategy: ignora las primeras `period` acciones de otra estrategia.

Emite HOLD durante las `period` primeras posiciones y, a partir de ahí,
la acción de la estrategia interna sin cambios.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from loguru import logger

from core.config_loader import get_config, get_nested
from core.types import Snapshot
from data.snapshots import snapshots_as_closings
from streams.fanout import duplicate
from streams.operate import operate
from strategies.action import Action
from strategies.base import Strategy


class DelayStrategy(Strategy):
    def __init__(self, period: int, inner_strategy: Strategy) -> None:
        if period < 0:
            raise ValueError(f"DelayStrategy: period debe ser >= 0 (recibido {period})")
        self.period = period
        self.inner_strategy = inner_strategy

    @classmethod
    def from_config(
        cls, inner_strategy: Strategy, cfg: dict[str, Any] | None = None
    ) -> DelayStrategy:
        cfg = cfg if cfg is not None else get_config()
        return cls(int(get_nested(cfg, "strategies", "delay", "period")), inner_strategy)

    @property
    def name(self) -> str:
        return f"D({self.inner_strategy.name})"

    def compute(self, snapshots: Iterable[Snapshot]) -> Iterator[Action]:
        logger.debug(f"[DelayStrategy] {self.name}: period={self.period}")
        splice = duplicate(snapshots, 2)

        inner_actions = self.inner_strategy.compute(splice[0])
        # Los cierres solo marcan el paso; avanzan al ritmo de las acciones.
        closings = snapshots_as_closings(splice[1])

        seen = 0

        def _delay(action: Action, _closing: float) -> Action:
            nonlocal seen
            seen += 1
            if seen <= self.period:
                return Action.HOLD
            return action

        return operate(inner_actions, closings, _delay)


__all__ = ["DelayStrategy"]
