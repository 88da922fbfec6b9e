# strategies/majority.py
"""
MajorityStrategy: vota entre varias estrategias en cada paso.

Gana la acción que supera estrictamente a cada una de las otras dos; un
empate produce HOLD.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from loguru import logger

from core.types import Snapshot
from strategies.action import Action
from strategies.base import Strategy, action_sources, count_actions


class MajorityStrategy(Strategy):
    def __init__(self, name: str = "", strategies: Sequence[Strategy] | None = None) -> None:
        self.strategies: list[Strategy] = list(strategies or [])
        # Sin nombre: Majority(n1,n2,...)
        self._name = name or "Majority(" + ",".join(s.name for s in self.strategies) + ")"

    @classmethod
    def with_strategies(cls, *strategies: Strategy) -> MajorityStrategy:
        """Grupo nombrado automáticamente como Majority(n1,n2,...)."""
        return cls("", strategies)

    @property
    def name(self) -> str:
        return self._name

    def compute(self, snapshots: Iterable[Snapshot]) -> Iterator[Action]:
        if not self.strategies:
            raise ValueError(f"{self.name}: el grupo no tiene estrategias")

        logger.debug(f"[MajorityStrategy] {self.name}: {len(self.strategies)} miembros")
        return self._compute(action_sources(self.strategies, snapshots))

    def _compute(self, sources: list[Iterator[Action]]) -> Iterator[Action]:
        while True:
            buy, hold, sell, ok = count_actions(sources)
            if not ok:
                return

            if buy > hold and buy > sell:
                yield Action.BUY
            elif sell > hold and sell > buy:
                yield Action.SELL
            else:
                yield Action.HOLD


__all__ = ["MajorityStrategy"]
