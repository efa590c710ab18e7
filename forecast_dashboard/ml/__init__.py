"""
Modelos de pronóstico para Forecast Dashboard
==============================================
Estrategias intercambiables sobre modelos de statsmodels.
"""
from .strategies import ForecastResult, ForecastStrategy, obtener_estrategia

__all__ = [
    'ForecastResult',
    'ForecastStrategy',
    'obtener_estrategia',
]
