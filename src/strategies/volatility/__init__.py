"""Estrategias basadas en indicadores de volatilidad."""

from strategies.volatility.bbw import BollingerBandsWidthStrategy

__all__ = ["BollingerBandsWidthStrategy"]
