"""Acción recomendada por una estrategia (Buy / Hold / Sell)."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import IntEnum

from streams.operate import map_stream

__all__ = [
    "Action",
    "action_to_annotation",
    "annotation_to_action",
    "actions_to_annotations",
    "annotations_to_actions",
    "normalize_actions",
]


class Action(IntEnum):
    SELL = -1
    HOLD = 0
    BUY = 1

    @property
    def annotation(self) -> str:
        return action_to_annotation(self)


_ANNOTATIONS = {
    Action.SELL: "S",
    Action.HOLD: "",
    Action.BUY: "B",
}
_ACTIONS = {v: k for k, v in _ANNOTATIONS.items() if v}


def action_to_annotation(action: Action) -> str:
    return _ANNOTATIONS[Action(action)]


def annotation_to_action(annotation: str) -> Action:
    """Anotaciones desconocidas o vacías -> HOLD."""
    return _ACTIONS.get(annotation.strip().upper(), Action.HOLD)


def actions_to_annotations(actions: Iterable[Action]) -> Iterator[str]:
    return map_stream(actions, action_to_annotation)


def annotations_to_actions(annotations: Iterable[str]) -> Iterator[Action]:
    return map_stream(annotations, annotation_to_action)


def normalize_actions(actions: Iterable[Action]) -> Iterator[Action]:
    """
    Elimina señales repetidas: tras un BUY, los BUY siguientes pasan a HOLD
    hasta que llega un SELL (y viceversa). Conserva la longitud.
    """
    last = Action.HOLD
    for action in actions:
        if action != Action.HOLD and action != last:
            last = action
            yield action
        else:
            yield Action.HOLD
