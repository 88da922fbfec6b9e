# src/streams/sync.py
"""
Primitivas de sincronización entre productor y consumidor.

- drain:    consume y descarta todo lo que quede en un stream.
- buffered: mueve la lectura de la fuente a un hilo con una cola acotada,
            de modo que productor y consumidor avancen a ritmos distintos
            con hasta `capacity` elementos de holgura.
- waitable: reenvía un stream desde un hilo y marca un `WaitGroup` cuando
            la fuente se agota, para que otro hilo pueda esperar a que el
            stream se haya consumido por completo.

Si la fuente lanza una excepción dentro del hilo, se captura y se vuelve a
lanzar en el consumidor en la misma posición del stream.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import queue
import threading
from typing import Any

from loguru import logger

from core.config_loader import get_config, get_nested
from core.types import T

__all__ = ["drain", "buffered", "waitable", "WaitGroup"]


class _Failure:
    def __init__(self, error: BaseException) -> None:
        self.error = error


_DONE = object()


def drain(stream: Iterable[Any]) -> None:
    """Consume todos los elementos restantes hasta que el stream se agota."""
    for _ in stream:
        pass


class WaitGroup:
    """Contador de trabajos pendientes; `wait()` bloquea hasta que llega a cero."""

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    def add(self, delta: int = 1) -> None:
        with self._cond:
            self._count += delta
            if self._count < 0:
                raise ValueError("WaitGroup: contador negativo")
            if self._count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self, timeout: float | None = None) -> bool:
        """Devuelve False si vence `timeout` antes de que el contador llegue a cero."""
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)


def _pump(source: Iterable[Any], q: queue.Queue, name: str) -> None:
    try:
        for item in source:
            q.put(item)
    except Exception as e:
        logger.error(f"[{name}] la fuente falló: {e!r}")
        q.put(_Failure(e))
        return
    q.put(_DONE)


def _consume(q: queue.Queue) -> Iterator[Any]:
    while True:
        item = q.get()
        if item is _DONE:
            return
        if isinstance(item, _Failure):
            raise item.error
        yield item


def buffered(stream: Iterable[T], capacity: int | None = None) -> Iterator[T]:
    """
    Envuelve `stream` con una cola acotada de `capacity` elementos.

    Args:
        stream: Stream de entrada.
        capacity: Holgura máxima entre productor y consumidor. Si es None se
            usa `pipeline.buffer_capacity` de la configuración.

    Raises:
        ValueError: Si `capacity < 1`.
    """
    if capacity is None:
        capacity = int(get_nested(get_config(), "pipeline", "buffer_capacity", default=1))
    if capacity < 1:
        raise ValueError(f"buffered: capacity debe ser >= 1 (recibido {capacity})")

    q: queue.Queue = queue.Queue(maxsize=capacity)
    worker = threading.Thread(
        target=_pump, args=(stream, q, "buffered"), name="buffered", daemon=True
    )
    worker.start()
    return _consume(q)


def waitable(wg: WaitGroup, stream: Iterable[T]) -> Iterator[T]:
    """
    Reenvía `stream` y libera `wg` cuando la fuente se ha agotado.

    El hilo de reenvío entrega los elementos de uno en uno, así que
    `wg.wait()` solo retorna cuando el consumidor ya ha recogido todos los
    elementos de la fuente.
    """
    wg.add(1)
    q: queue.Queue = queue.Queue(maxsize=1)

    def _run() -> None:
        try:
            _pump(stream, q, "waitable")
        finally:
            wg.done()

    threading.Thread(target=_run, name="waitable", daemon=True).start()
    return _consume(q)
