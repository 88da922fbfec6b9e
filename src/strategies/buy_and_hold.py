# strategies/buy_and_hold.py
"""
Estrategia Buy & Hold mínima basada en la interfaz Strategy.

Emite BUY con el primer snapshot y HOLD con todos los demás. Sirve como
referencia para comparar el outcome de otras estrategias y como miembro
sencillo de estrategias compuestas.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from core.types import Snapshot
from strategies.action import Action
from strategies.base import Strategy, register_strategy


@register_strategy("buy_and_hold")
class BuyAndHoldStrategy(Strategy):
    @property
    def name(self) -> str:
        return "Buy and Hold"

    def compute(self, snapshots: Iterable[Snapshot]) -> Iterator[Action]:
        bought = False
        for _ in snapshots:
            if not bought:
                bought = True
                yield Action.BUY
            else:
                yield Action.HOLD
