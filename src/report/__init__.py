# src/report/__init__.py
"""Informes (DataFrame / HTML) a partir de columnas en forma de stream."""

from report.report import AnnotationReportColumn, NumericReportColumn, Report, ReportColumn

__all__ = [
    "Report",
    "ReportColumn",
    "NumericReportColumn",
    "AnnotationReportColumn",
]
