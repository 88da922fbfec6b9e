"""
Carga de series desde CSV como streams.

Convierte cada fila de un CSV en una instancia de un dataclass (por ejemplo
`Snapshot`) usando los tipos declarados en sus campos. Pensado para
fixtures de tests y backtests offline.
"""

from __future__ import annotations

import csv
from collections.abc import Iterator
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
import typing
from typing import Any

from loguru import logger
import pandas as pd

from core.types import Snapshot, T

__all__ = ["read_from_csv_file", "read_snapshots_csv"]


def _normalize(name: str) -> str:
    return "".join(ch for ch in name.strip().lower() if ch.isalnum())


def _convert(raw: str, kind: Any) -> Any:
    if kind is datetime:
        return pd.Timestamp(raw).to_pydatetime()
    if kind is date:
        return pd.Timestamp(raw).date()
    if isinstance(kind, type) and issubclass(kind, Enum):
        return kind(int(float(raw)))
    if kind is int:
        return int(float(raw))
    if kind is float:
        return float(raw)
    if kind is bool:
        return raw.strip().lower() in {"1", "true", "t", "yes", "y"}
    return raw


def read_from_csv_file(
    path: str | Path,
    row_type: type[T],
    has_header: bool = True,
) -> Iterator[T]:
    """
    Lee un CSV y emite una instancia de `row_type` por fila.

    Args:
        path: Ruta al archivo CSV.
        row_type: Dataclass destino.
        has_header: Si True, las columnas se asignan por nombre de cabecera
            (sin distinguir mayúsculas, espacios ni '_'); si False, por
            posición en el orden de los campos del dataclass.

    Returns:
        Stream de filas convertidas. El archivo se abre al empezar a
        consumir el stream y se cierra al agotarlo.

    Raises:
        TypeError: Si `row_type` no es un dataclass.
        FileNotFoundError: Si el archivo no existe.
        ValueError: Si una celda no se puede convertir al tipo del campo.
    """
    if not is_dataclass(row_type):
        raise TypeError(f"{row_type!r} debe ser un dataclass.")

    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"No existe el CSV: {csv_path}")

    hints = typing.get_type_hints(row_type)
    row_fields = [(f.name, hints.get(f.name, str)) for f in fields(row_type)]
    return _read(csv_path, row_type, row_fields, has_header)


def _read(
    csv_path: Path,
    row_type: type[T],
    row_fields: list[tuple[str, Any]],
    has_header: bool,
) -> Iterator[T]:
    with csv_path.open(newline="", encoding="utf-8") as f:
        reader = csv.reader(f)

        if has_header:
            header = next(reader, None)
            if header is None:
                return
            positions = {_normalize(h): i for i, h in enumerate(header)}
            columns = [
                (name, kind, positions[_normalize(name)])
                for name, kind in row_fields
                if _normalize(name) in positions
            ]
        else:
            columns = [(name, kind, i) for i, (name, kind) in enumerate(row_fields)]

        logger.debug(f"[csv_feed] {csv_path.name}: columnas {[c[0] for c in columns]}")

        for line_no, row in enumerate(reader, start=2 if has_header else 1):
            if not row:
                continue
            values: dict[str, Any] = {}
            for name, kind, pos in columns:
                if pos >= len(row):
                    continue
                try:
                    values[name] = _convert(row[pos], kind)
                except (TypeError, ValueError) as e:
                    logger.warning(
                        f"[csv_feed] {csv_path.name}:{line_no} columna '{name}' inválida: {e!r}"
                    )
                    raise ValueError(
                        f"{csv_path}:{line_no}: no se pudo convertir '{row[pos]}' ({name})"
                    ) from e
            yield row_type(**values)


def read_snapshots_csv(path: str | Path, has_header: bool = True) -> Iterator[Snapshot]:
    """Atajo de `read_from_csv_file` para CSV OHLCV (Date, Open, High, Low, Close, Adj Close, Volume)."""
    return read_from_csv_file(path, Snapshot, has_header=has_header)
