# strategies/split.py
"""
SplitStrategy: una estrategia decide las compras y otra las ventas.

En cada paso:
- BUY  si la estrategia de compra dice BUY,
- SELL si no, y la estrategia de venta dice SELL,
- HOLD en cualquier otro caso.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from loguru import logger

from core.types import Snapshot
from streams.fanout import duplicate
from streams.operate import operate
from strategies.action import Action
from strategies.base import Strategy


def _split(buy_action: Action, sell_action: Action) -> Action:
    if buy_action == Action.BUY:
        return Action.BUY
    if sell_action == Action.SELL:
        return Action.SELL
    return Action.HOLD


class SplitStrategy(Strategy):
    def __init__(self, buy_strategy: Strategy, sell_strategy: Strategy) -> None:
        self.buy_strategy = buy_strategy
        self.sell_strategy = sell_strategy

    @property
    def name(self) -> str:
        return f"Split({self.buy_strategy.name},{self.sell_strategy.name})"

    def compute(self, snapshots: Iterable[Snapshot]) -> Iterator[Action]:
        logger.debug(f"[SplitStrategy] {self.name}")
        splice = duplicate(snapshots, 2)

        buy_actions = self.buy_strategy.compute(splice[0])
        sell_actions = self.sell_strategy.compute(splice[1])

        return operate(buy_actions, sell_actions, _split)


def all_split_strategies(strategies: Sequence[Strategy]) -> list[Strategy]:
    """Todos los pares ordenados (compra, venta) con posiciones distintas: k*k - k."""
    return [
        SplitStrategy(buy, sell)
        for i, buy in enumerate(strategies)
        for j, sell in enumerate(strategies)
        if i != j
    ]


__all__ = ["SplitStrategy", "all_split_strategies"]
