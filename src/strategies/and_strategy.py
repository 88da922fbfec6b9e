# strategies/and_strategy.py
"""
AndStrategy: combina varias estrategias y solo emite una acción operable
cuando TODAS coinciden en el mismo paso.

Es un enfoque conservador: la recomendación llega únicamente con consenso
total del grupo. Cualquier desacuerdo produce HOLD.

Generadores:
- all_and_strategies(ss): cada par no ordenado de `ss` -> k*(k-1)/2.
- all_and_strategies_with(ss1, ss2): producto cartesiano de ambas listas;
  si un par es la misma estrategia, se usa la estrategia sola.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from loguru import logger

from core.types import Snapshot
from strategies.action import Action
from strategies.base import Strategy, action_sources, count_actions


class AndStrategy(Strategy):
    """
    Grupo de estrategias consultadas en paralelo.

    Atributos
    ---------
    strategies : list[Strategy]
        Miembros del grupo (compartidos por referencia; son configuración
        de solo lectura).
    """

    def __init__(self, name: str, strategies: Sequence[Strategy] | None = None) -> None:
        self._name = name
        self.strategies: list[Strategy] = list(strategies or [])

    @classmethod
    def with_strategies(cls, *strategies: Strategy) -> AndStrategy:
        """Grupo nombrado automáticamente como AND(n1,n2,...)."""
        return cls(_and_name(strategies), strategies)

    @property
    def name(self) -> str:
        return self._name

    def compute(self, snapshots: Iterable[Snapshot]) -> Iterator[Action]:
        if not self.strategies:
            raise ValueError(f"{self.name}: el grupo no tiene estrategias")

        logger.debug(f"[AndStrategy] {self.name}: {len(self.strategies)} miembros")
        return self._compute(action_sources(self.strategies, snapshots))

    def _compute(self, sources: list[Iterator[Action]]) -> Iterator[Action]:
        members = len(sources)
        while True:
            buy, _, sell, ok = count_actions(sources)
            if not ok:
                return

            if sell == members:
                yield Action.SELL
            elif buy == members:
                yield Action.BUY
            else:
                yield Action.HOLD


def _and_name(strategies: Iterable[Strategy]) -> str:
    return "AND(" + ",".join(s.name for s in strategies) + ")"


def all_and_strategies(strategies: Sequence[Strategy]) -> list[Strategy]:
    """Todas las combinaciones AND de dos estrategias distintas de la lista."""
    combined: list[Strategy] = []
    for i, first in enumerate(strategies):
        for second in strategies[i + 1 :]:
            combined.append(AndStrategy.with_strategies(first, second))
    return combined


def all_and_strategies_with(
    strategies1: Sequence[Strategy], strategies2: Sequence[Strategy]
) -> list[Strategy]:
    """
    Producto cartesiano AND de dos listas.

    Cuando el par es la misma instancia se añade la estrategia tal cual
    (AND de una estrategia consigo misma es ella misma).
    """
    combined: list[Strategy] = []
    for first in strategies1:
        for second in strategies2:
            if first is second:
                combined.append(first)
                continue
            combined.append(AndStrategy.with_strategies(first, second))
    return combined


__all__ = ["AndStrategy", "all_and_strategies", "all_and_strategies_with"]
