"""Componentes visuales reutilizables"""

from .charts import (
    MENSAJE_NO_DISPONIBLE,
    crear_figura_forecast,
    crear_figura_historica,
    crear_figura_no_disponible,
    tabla_forecast,
)
from .metrics_panel import crear_panel_metricas

__all__ = [
    'MENSAJE_NO_DISPONIBLE',
    'crear_figura_forecast',
    'crear_figura_historica',
    'crear_figura_no_disponible',
    'crear_panel_metricas',
    'tabla_forecast',
]
