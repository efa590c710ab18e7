"""
Funciones de formateo para Forecast Dashboard
"""
from typing import Optional, Union

import pandas as pd


def formato_porcentaje(valor: Optional[Union[float, int]], decimales: int = 1) -> str:
    """Formatea una fraccion (0.95) como porcentaje (95.0%)"""
    if valor is None:
        return "--"
    try:
        return f"{valor * 100:.{decimales}f}%"
    except (TypeError, ValueError):
        return f"{valor}%"


def formato_fecha(valor, formato: str = "%Y-%m-%d") -> str:
    """Formatea fechas de pandas/datetime como texto ISO"""
    if valor is None or (not isinstance(valor, str) and pd.isna(valor)):
        return "--"
    return pd.Timestamp(valor).strftime(formato)
