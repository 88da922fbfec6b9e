# src/strategies/__init__.py
"""
Estrategias: producen un stream de acciones (BUY/HOLD/SELL) a partir de un
stream de snapshots, y se componen entre sí.

Importar este paquete registra las estrategias hoja (`buy_and_hold`, `bbw`)
en el registro global de `strategies.base`.
"""

from __future__ import annotations

from strategies.action import (
    Action,
    action_to_annotation,
    actions_to_annotations,
    annotation_to_action,
    annotations_to_actions,
    normalize_actions,
)
from strategies.and_strategy import AndStrategy, all_and_strategies, all_and_strategies_with
from strategies.base import (
    Strategy,
    action_sources,
    build_strategy,
    compute_with_outcome,
    count_actions,
    default_report,
    get_strategy_class,
    list_strategies,
    outcome,
    register_strategy,
)
from strategies.buy_and_hold import BuyAndHoldStrategy
from strategies.decorator import DelayStrategy, NoFlatStrategy, flatness
from strategies.majority import MajorityStrategy
from strategies.split import SplitStrategy, all_split_strategies
from strategies.volatility import BollingerBandsWidthStrategy

__all__ = [
    "Action",
    "action_to_annotation",
    "annotation_to_action",
    "actions_to_annotations",
    "annotations_to_actions",
    "normalize_actions",
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
    "BuyAndHoldStrategy",
    "AndStrategy",
    "all_and_strategies",
    "all_and_strategies_with",
    "MajorityStrategy",
    "SplitStrategy",
    "all_split_strategies",
    "DelayStrategy",
    "NoFlatStrategy",
    "flatness",
    "BollingerBandsWidthStrategy",
]
