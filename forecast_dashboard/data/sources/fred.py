"""
Fuente FRED - Federal Reserve Economic Data

Atiende identificadores con prefijo "FRED/" (vocabulario heredado de Quandl,
ej: "FRED/DCOILWTICO"). FRED no colapsa a fin de periodo, asi que se
descargan las observaciones nativas y se colapsan localmente.
"""
from datetime import date
from typing import Optional

import httpx
import pandas as pd

from forecast_dashboard.data.sources.base import DataSource
from forecast_dashboard.registry.periods import PeriodVocabulary
from forecast_dashboard.utils.exceptions import FetchFailedError

PREFIJO = "FRED/"


class FREDSource(DataSource):
    """Fuente de datos para FRED (St. Louis Fed)."""

    def __init__(
        self,
        periods: PeriodVocabulary,
        api_key: Optional[str] = None,
        base_url: str = "https://api.stlouisfed.org/fred",
        client: Optional[httpx.Client] = None,
        timeout: float = 15.0
    ):
        super().__init__(periods, client=client, timeout=timeout)
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "FRED"

    def supports(self, source_id: str) -> bool:
        return bool(source_id) and source_id.upper().startswith(PREFIJO) and len(source_id) > len(PREFIJO)

    def _obtener_observaciones(
        self,
        source_id: str,
        inicio: date,
        fin: date,
        period_id: str
    ) -> pd.Series:
        if not self._api_key:
            raise FetchFailedError("FRED API key no configurada (FRED_API_KEY)", source_id=source_id)

        series_id = source_id[len(PREFIJO):]
        payload = self._get_json(
            f"{self.base_url}/series/observations",
            params={
                'series_id': series_id,
                'api_key': self._api_key,
                'file_type': 'json',
                'observation_start': pd.Timestamp(inicio).strftime('%Y-%m-%d'),
                'observation_end': pd.Timestamp(fin).strftime('%Y-%m-%d'),
            },
            source_id=source_id
        )

        if 'error_message' in payload:
            raise FetchFailedError(f"FRED: {payload['error_message']}", source_id=source_id)

        observaciones = payload.get('observations')
        if not isinstance(observaciones, list):
            raise FetchFailedError("Respuesta de FRED sin 'observations'", source_id=source_id)

        # FRED marca los valores faltantes con "."
        validas = [o for o in observaciones if o.get('value') not in (None, '.', '')]
        if not validas:
            return pd.Series(dtype=float)

        return pd.Series(
            [o['value'] for o in validas],
            index=pd.to_datetime([o['date'] for o in validas])
        )
