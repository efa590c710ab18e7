"""
Capa de Servicios para Forecast Dashboard

Orquesta seleccion -> descarga -> pronostico -> combinacion, separando
la logica de negocio de los callbacks de Dash.
"""

from .selection import SelectionState
from .pipeline import (
    CellState,
    CellStatus,
    ForecastPipeline,
    PipelineState,
    combinar_series,
    generar_fechas_futuras,
)
from .session import DashboardSession, SessionStore
from .window import calcular_ventana

__all__ = [
    'SelectionState',
    'CellState',
    'CellStatus',
    'ForecastPipeline',
    'PipelineState',
    'combinar_series',
    'generar_fechas_futuras',
    'DashboardSession',
    'SessionStore',
    'calcular_ventana',
]
