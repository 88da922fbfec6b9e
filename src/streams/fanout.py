# src/streams/fanout.py
"""
Fan-out de streams: una entrada, N salidas independientes.

Cada salida (rama) tiene su propia cola FIFO. Cuando una rama necesita un
elemento que todavía no se ha leído, se lee UNA vez de la fuente y se
encola en todas las ramas activas. Así la fuente se consume exactamente una
vez por elemento, sin importar cuántas ramas haya, y el tamaño de cada cola
queda acotado por la distancia a la rama más lenta.

Las ramas pueden consumirse desde hilos distintos (lectura protegida con
un Lock). Si la fuente falla, cada rama recibe primero los elementos ya
encolados y después la misma excepción.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
import threading
from typing import Generic

from core.types import T

__all__ = ["duplicate", "Branch"]


class _Fanout(Generic[T]):
    def __init__(self, source: Iterable[T], count: int) -> None:
        self._source = iter(source)
        self._queues: list[deque[T] | None] = [deque() for _ in range(count)]
        self._exhausted = False
        self._error: Exception | None = None
        self._lock = threading.Lock()

    def pull(self, index: int) -> T:
        with self._lock:
            queue = self._queues[index]
            if queue is None:
                raise StopIteration
            if not queue:
                if self._error is not None:
                    raise self._error
                if self._exhausted:
                    raise StopIteration
                try:
                    item = next(self._source)
                except StopIteration:
                    self._exhausted = True
                    raise
                except Exception as e:
                    # Todas las ramas ven el fallo al vaciar su cola.
                    self._error = e
                    raise
                for q in self._queues:
                    if q is not None:
                        q.append(item)
            return queue.popleft()

    def detach(self, index: int) -> None:
        with self._lock:
            self._queues[index] = None

    def pending(self, index: int) -> int:
        with self._lock:
            queue = self._queues[index]
            return 0 if queue is None else len(queue)


class Branch(Iterator[T]):
    """
    Una de las salidas de `duplicate`.

    `close()` desengancha la rama: deja de acumular elementos y se comporta
    como un stream agotado. Es la forma de descartar una salida que no se va
    a leer sin forzar la lectura completa de la fuente.
    """

    def __init__(self, fanout: _Fanout[T], index: int) -> None:
        self._fanout = fanout
        self._index = index

    def __iter__(self) -> Branch[T]:
        return self

    def __next__(self) -> T:
        return self._fanout.pull(self._index)

    def close(self) -> None:
        self._fanout.detach(self._index)

    @property
    def pending(self) -> int:
        """Elementos ya leídos de la fuente que esta rama aún no consumió."""
        return self._fanout.pending(self._index)


def duplicate(stream: Iterable[T], count: int) -> list[Branch[T]]:
    """
    Duplica `stream` en `count` streams independientes.

    Args:
        stream: Stream de entrada.
        count: Número de salidas (>= 1).

    Returns:
        Lista de `count` ramas; todas reciben todos los elementos en el mismo
        orden y se agotan cuando se agota la entrada.

    Raises:
        ValueError: Si `count < 1`.
    """
    if count < 1:
        raise ValueError(f"duplicate: count debe ser >= 1 (recibido {count})")

    fanout = _Fanout(stream, count)
    return [Branch(fanout, i) for i in range(count)]
