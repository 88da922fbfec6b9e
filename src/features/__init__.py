# src/features/__init__.py
"""
Indicadores técnicos sobre streams.

Módulos:
- technical_indicators: MovingSum, Sma, MovingStd, BollingerBands
"""

from .technical_indicators import (
    BollingerBands,
    Indicator,
    MovingStd,
    MovingSum,
    Sma,
)

__all__ = [
    "Indicator",
    "MovingSum",
    "Sma",
    "MovingStd",
    "BollingerBands",
]
