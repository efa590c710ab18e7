"""
Fuente Nasdaq Data Link (antes Quandl)

Identificadores "BASE/CODIGO" (ej: "LBMA/GOLD"). La API colapsa en el
servidor con el parametro `collapse`, cuyo vocabulario coincide con los ids
de granularidad del catalogo (daily, weekly, monthly, quarterly, annual).
"""
from datetime import date
from typing import Dict, Optional

import httpx
import pandas as pd

from forecast_dashboard.data.sources.base import DataSource
from forecast_dashboard.registry.periods import PeriodVocabulary
from forecast_dashboard.utils.exceptions import FetchFailedError

# Columna de valor por dataset cuando la primera no es la deseada
COLUMNAS_VALOR: Dict[str, str] = {
    "LBMA/GOLD": "USD (PM)",
    "LBMA/SILVER": "USD",
}


class NasdaqDataLinkSource(DataSource):
    """Fuente de datos para datasets de Nasdaq Data Link."""

    def __init__(
        self,
        periods: PeriodVocabulary,
        api_key: Optional[str] = None,
        base_url: str = "https://data.nasdaq.com/api/v3",
        columnas: Optional[Dict[str, str]] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 15.0
    ):
        super().__init__(periods, client=client, timeout=timeout)
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.columnas = dict(COLUMNAS_VALOR if columnas is None else columnas)

    @property
    def name(self) -> str:
        return "Nasdaq Data Link"

    def supports(self, source_id: str) -> bool:
        if not source_id or source_id.count("/") != 1:
            return False
        base, codigo = source_id.split("/")
        return bool(base) and bool(codigo)

    def _obtener_observaciones(
        self,
        source_id: str,
        inicio: date,
        fin: date,
        period_id: str
    ) -> pd.Series:
        params = {
            'start_date': pd.Timestamp(inicio).strftime('%Y-%m-%d'),
            'end_date': pd.Timestamp(fin).strftime('%Y-%m-%d'),
            'collapse': period_id,
            'order': 'asc',
        }
        if self._api_key:
            params['api_key'] = self._api_key

        payload = self._get_json(
            f"{self.base_url}/datasets/{source_id}/data.json",
            params=params,
            source_id=source_id
        )

        if 'quandl_error' in payload:
            error = payload['quandl_error']
            raise FetchFailedError(
                f"Nasdaq Data Link: {error.get('message', error)}",
                source_id=source_id
            )

        dataset = payload.get('dataset_data')
        if not isinstance(dataset, dict):
            raise FetchFailedError("Respuesta sin 'dataset_data'", source_id=source_id)

        columnas = dataset.get('column_names') or []
        filas = dataset.get('data') or []
        if len(columnas) < 2:
            raise FetchFailedError("Dataset sin columnas de valor", source_id=source_id)
        if not filas:
            return pd.Series(dtype=float)

        df = pd.DataFrame(filas, columns=columnas)
        columna = self.columnas.get(source_id, columnas[1])
        if columna not in df.columns:
            raise FetchFailedError(
                f"Columna '{columna}' no existe en {source_id}",
                source_id=source_id
            )

        return pd.Series(df[columna].values, index=pd.to_datetime(df[columnas[0]]))
