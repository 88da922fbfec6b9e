# src/strategies/base.py
"""
Tipos y utilidades base para estrategias.

Incluye:
- Interfaz `Strategy`: name / compute(snapshots) -> actions / report(snapshots).
- Helpers para estrategias compuestas: `action_sources`, `count_actions`.
- Outcome (backtest mínimo): `outcome`, `compute_with_outcome`.
- Informe por defecto: `default_report`.
- Registro global de estrategias: register_strategy / get_strategy_class /
  list_strategies / build_strategy.

Una estrategia es configuración de solo lectura: cada llamada a `compute`
monta un pipeline nuevo, así que varias llamadas concurrentes sobre la
misma instancia no comparten estado.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from core.types import Snapshot
from data.snapshots import snapshots_as_closings, snapshots_as_dates
from report.report import AnnotationReportColumn, NumericReportColumn, Report
from streams.arithmetic import multiply_by
from streams.fanout import duplicate
from streams.operate import operate
from strategies.action import Action, actions_to_annotations

# ----------------------------- Interfaz base -------------------------------


class Strategy(ABC):
    """
    Interfaz común para estrategias.

    `compute` recibe un stream de snapshots y devuelve un stream de
    acciones con exactamente una acción por snapshot, en el mismo orden.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def compute(self, snapshots: Iterable[Snapshot]) -> Iterator[Action]: ...

    def report(self, snapshots: Iterable[Snapshot]) -> Report:
        return default_report(self, snapshots)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


# ------------------------- Helpers para compuestas -------------------------


def action_sources(
    strategies: Sequence[Strategy], snapshots: Iterable[Snapshot]
) -> list[Iterator[Action]]:
    """Duplica los snapshots una vez por estrategia y devuelve sus acciones."""
    splice = duplicate(snapshots, len(strategies))
    return [s.compute(branch) for s, branch in zip(strategies, splice)]


def count_actions(sources: Sequence[Iterator[Action]]) -> tuple[int, int, int, bool]:
    """
    Lee una acción de cada fuente y las cuenta.

    Returns:
        (buy, hold, sell, ok). ok=False si alguna fuente se agotó; en ese
        caso los contadores no son significativos.
    """
    buy = hold = sell = 0
    for source in sources:
        action = next(source, None)
        if action is None:
            return 0, 0, 0, False
        if action == Action.BUY:
            buy += 1
        elif action == Action.SELL:
            sell += 1
        else:
            hold += 1
    return buy, hold, sell, True


# --------------------------------- Outcome ---------------------------------


def outcome(closings: Iterable[float], actions: Iterable[Action]) -> Iterator[float]:
    """
    Resultado acumulado de seguir las acciones con una cuenta unitaria.

    Empieza con balance 1.0 y 0 unidades. BUY convierte todo el balance en
    unidades al cierre del paso; SELL convierte todas las unidades en
    balance. En cada paso emite balance + unidades * cierre - 1.0.

    Un BUY con cierre 0 se ignora (no hay precio al que comprar).
    """
    balance = 1.0
    shares = 0.0

    def _step(closing: float, action: Action) -> float:
        nonlocal balance, shares
        if balance > 0 and closing != 0 and action == Action.BUY:
            shares = balance / closing
            balance = 0.0
        elif shares > 0 and action == Action.SELL:
            balance = shares * closing
            shares = 0.0
        return balance + shares * closing - 1.0

    return operate(closings, actions, _step)


def compute_with_outcome(
    strategy: Strategy, snapshots: Iterable[Snapshot]
) -> tuple[Iterator[Action], Iterator[float]]:
    """Acciones de `strategy` y su outcome, ambos con la longitud de la entrada."""
    splice = duplicate(snapshots, 2)
    closings = snapshots_as_closings(splice[1])

    actions = duplicate(strategy.compute(splice[0]), 2)
    outcomes = outcome(closings, actions[1])

    return actions[0], outcomes


# ---------------------------------- Report ---------------------------------


def default_report(strategy: Strategy, snapshots: Iterable[Snapshot]) -> Report:
    """
    Informe estándar: Close + anotaciones en el gráfico 0 y Outcome (%) en
    un gráfico secundario.
    """
    splice = duplicate(snapshots, 3)

    dates = snapshots_as_dates(splice[0])
    closings = snapshots_as_closings(splice[1])

    actions, outcomes = compute_with_outcome(strategy, splice[2])
    annotations = actions_to_annotations(actions)
    outcomes = multiply_by(outcomes, 100)

    report = Report(strategy.name, dates)
    outcome_chart = report.add_chart()

    report.add_column(NumericReportColumn("Close", closings))
    report.add_column(AnnotationReportColumn(annotations))
    report.add_column(NumericReportColumn("Outcome", outcomes), outcome_chart)

    return report


# ------------------------------- Registro ---------------------------------

_REGISTRY: dict[str, type[Strategy]] = {}


def register_strategy(*args):
    """
    Registra una estrategia en el registro global.

    Usos soportados:
      - @register_strategy("nombre")
      - register_strategy("nombre", Clase)    # llamada directa
    """

    def _register(name: str, cls: type[Strategy]) -> type[Strategy]:
        if not (isinstance(cls, type) and issubclass(cls, Strategy)):
            raise TypeError(f"{cls!r} debe heredar de Strategy.")
        _REGISTRY[name] = cls
        return cls

    if len(args) == 2 and isinstance(args[0], str):
        return _register(args[0], args[1])

    if len(args) == 1 and isinstance(args[0], str):
        name = args[0]

        def _decorator(cls: type[Strategy]) -> type[Strategy]:
            return _register(name, cls)

        return _decorator

    raise TypeError("register_strategy espera (nombre) o (nombre, clase)")


def get_strategy_class(name: str) -> type[Strategy]:
    if name in _REGISTRY:
        return _REGISTRY[name]
    available = ", ".join(sorted(_REGISTRY))
    raise KeyError(f"Estrategia no registrada: {name}. Disponibles: {available}")


def list_strategies() -> dict[str, type[Strategy]]:
    return dict(_REGISTRY)


def build_strategy(name: str, **params: Any) -> Strategy:
    return get_strategy_class(name)(**params)


__all__ = [
    "Strategy",
    "action_sources",
    "count_actions",
    "outcome",
    "compute_with_outcome",
    "default_report",
    "register_strategy",
    "get_strategy_class",
    "list_strategies",
    "build_strategy",
]
