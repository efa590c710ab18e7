"""
Ventana visible por defecto del grafico de pronostico.

Solo enfoca el rango inicial del eje X; no altera la serie combinada.
"""
from typing import Optional, Sequence, Tuple

import pandas as pd
from dateutil.relativedelta import relativedelta
from loguru import logger

from forecast_dashboard.services.selection import SelectionState
from forecast_dashboard.utils.constants import MESES_VENTANA_VISIBLE


def calcular_ventana(
    selection: SelectionState,
    fechas_futuras: Optional[Sequence],
    meses_atras: int = MESES_VENTANA_VISIBLE
) -> Optional[Tuple[pd.Timestamp, pd.Timestamp]]:
    """
    Ventana [fin del rango - `meses_atras` meses, ultima fecha futura].

    Returns:
        (inicio, fin) o None si no hay fechas futuras; en ese caso el grafico
        se muestra con el rango completo.
    """
    if fechas_futuras is None or len(fechas_futuras) == 0:
        logger.warning(
            f"Sin fechas futuras para {selection.source_id}; se usa el rango completo"
        )
        return None

    fin_rango = pd.Timestamp(selection.range_end)
    inicio = pd.Timestamp(fin_rango.to_pydatetime() - relativedelta(months=meses_atras))
    fin = pd.Timestamp(fechas_futuras[-1])
    return inicio, fin
