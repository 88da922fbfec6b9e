# src/report/report.py
"""
report.py: informe tabular/HTML construido a partir de streams alineados.

Un `Report` recibe un stream de fechas y un conjunto de columnas, cada una
envolviendo su propio stream (numérico o de anotaciones). Todas las
columnas deben estar alineadas índice a índice con las fechas: el informe
las combina con un zip estricto (manda el stream más corto).

Las columnas se agrupan en gráficos (`add_chart`); el gráfico 0 existe
siempre y el resto se usan para series en un eje separado (p.ej. outcome).

API:
- Report(title, dates)
- add_chart() -> int
- add_column(column, chart_index=0)
- to_dataframe() -> pd.DataFrame
- write_to_file(path) -> Path
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger
import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from core.config_loader import get_config, get_nested

__all__ = [
    "ReportColumn",
    "NumericReportColumn",
    "AnnotationReportColumn",
    "Report",
]


@dataclass
class ReportColumn:
    name: str
    values: Iterable[Any]

    @property
    def kind(self) -> str:
        return "numeric"


class NumericReportColumn(ReportColumn):
    pass


class AnnotationReportColumn(ReportColumn):
    def __init__(self, values: Iterable[str], name: str = "Annotation") -> None:
        super().__init__(name=name, values=values)

    @property
    def kind(self) -> str:
        return "annotation"


class Report:
    """Informe con columnas nombradas indexadas por fecha."""

    def __init__(self, title: str, dates: Iterable[datetime]) -> None:
        self.title = title
        self.dates = dates
        self.charts: list[list[ReportColumn]] = [[]]
        self._frame: pd.DataFrame | None = None

    def add_chart(self) -> int:
        self.charts.append([])
        return len(self.charts) - 1

    def add_column(self, column: ReportColumn, chart_index: int = 0) -> None:
        if not 0 <= chart_index < len(self.charts):
            raise ValueError(
                f"chart_index {chart_index} fuera de rango (hay {len(self.charts)} gráficos)"
            )
        if self._frame is not None:
            raise ValueError("El informe ya se ha materializado; no se admiten más columnas.")
        self.charts[chart_index].append(column)

    @property
    def columns(self) -> list[tuple[int, ReportColumn]]:
        return [(i, c) for i, chart in enumerate(self.charts) for c in chart]

    def _unique_names(self) -> list[str]:
        seen: dict[str, int] = {}
        names = []
        for _, column in self.columns:
            n = seen.get(column.name, 0)
            seen[column.name] = n + 1
            names.append(column.name if n == 0 else f"{column.name}_{n}")
        return names

    def to_dataframe(self) -> pd.DataFrame:
        """
        Materializa el informe consumiendo todos los streams una sola vez.
        Llamadas posteriores devuelven el mismo DataFrame.
        """
        if self._frame is not None:
            return self._frame

        names = self._unique_names()
        rows = list(zip(self.dates, *(c.values for _, c in self.columns)))
        frame = pd.DataFrame(rows, columns=["Date", *names])
        frame = frame.set_index("Date")

        self._frame = frame
        return frame

    def _figure(self) -> go.Figure:
        frame = self.to_dataframe()
        names = self._unique_names()

        fig = make_subplots(rows=len(self.charts), cols=1, shared_xaxes=True)
        anchor: dict[int, str] = {}

        for (chart, column), name in zip(self.columns, names):
            row = chart + 1
            if column.kind == "annotation":
                mask = frame[name].astype(bool)
                base = frame[anchor[chart]] if chart in anchor else pd.Series(0.0, index=frame.index)
                fig.add_trace(
                    go.Scatter(
                        x=frame.index[mask],
                        y=base[mask],
                        mode="markers+text",
                        text=frame[name][mask],
                        textposition="top center",
                        name=name,
                    ),
                    row=row,
                    col=1,
                )
            else:
                anchor.setdefault(chart, name)
                fig.add_trace(
                    go.Scatter(x=frame.index, y=frame[name], mode="lines", name=name),
                    row=row,
                    col=1,
                )

        fig.update_layout(title=self.title)
        return fig

    def write_to_file(self, path: str | Path) -> Path:
        """
        Escribe el informe como HTML (plotly).

        Las rutas relativas se resuelven bajo `report.output_dir` de la
        configuración.
        """
        out = Path(path)
        if not out.is_absolute():
            out_dir = Path(get_nested(get_config(), "report", "output_dir", default="."))
            out = out_dir / out
        out.parent.mkdir(parents=True, exist_ok=True)

        self._figure().write_html(str(out), include_plotlyjs="cdn")
        logger.info(f"[report] '{self.title}' escrito en {out}")
        return out
