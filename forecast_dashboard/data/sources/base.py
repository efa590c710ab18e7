"""
Interfaz abstracta para las fuentes de datos.

Una fuente recibe un identificador de serie, un rango de fechas y una
granularidad, y devuelve una serie ordenada por fecha o lanza
FetchFailedError. Agregar una fuente nueva solo requiere implementar
`supports` y `_obtener_observaciones`.
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

import httpx
import pandas as pd

from forecast_dashboard.registry.periods import PeriodVocabulary
from forecast_dashboard.utils.constants import COLUMNA_REAL
from forecast_dashboard.utils.exceptions import FetchFailedError
from forecast_dashboard.utils.logger import LoggerMixin

# Cliente HTTP compartido (reutiliza conexiones entre requests)
_sync_client: Optional[httpx.Client] = None


def get_sync_client(timeout: float = 15.0) -> httpx.Client:
    """Obtiene o crea el cliente HTTP compartido con pool de conexiones."""
    global _sync_client
    if _sync_client is None or _sync_client.is_closed:
        _sync_client = httpx.Client(
            timeout=timeout,
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
                keepalive_expiry=30.0
            )
        )
    return _sync_client


def normalizar_serie(
    serie: pd.Series,
    inicio: date,
    fin: date,
    source_id: str = None
) -> pd.Series:
    """
    Garantiza las postcondiciones de una serie descargada.

    - valores float sin nulos
    - indice DatetimeIndex estrictamente creciente, sin duplicados
    - fechas dentro de [inicio, fin]

    Raises:
        FetchFailedError: si no queda ninguna observacion
    """
    serie = pd.to_numeric(serie, errors='coerce').astype(float).dropna()
    serie.index = pd.DatetimeIndex(pd.to_datetime(serie.index)).normalize()
    serie = serie.sort_index(kind='mergesort')
    serie = serie[~serie.index.duplicated(keep='last')]
    serie = serie[(serie.index >= pd.Timestamp(inicio)) & (serie.index <= pd.Timestamp(fin))]

    if serie.empty:
        raise FetchFailedError(
            f"Sin datos entre {inicio} y {fin}",
            source_id=source_id
        )

    serie.name = COLUMNA_REAL
    serie.index.name = "fecha"
    return serie


class DataSource(ABC, LoggerMixin):
    """Clase base abstracta para las fuentes de datos."""

    def __init__(self, periods: PeriodVocabulary, client: Optional[httpx.Client] = None,
                 timeout: float = 15.0):
        self.periods = periods
        self._client = client
        self._timeout = timeout

    @property
    def client(self) -> httpx.Client:
        return self._client if self._client is not None else get_sync_client(self._timeout)

    @property
    @abstractmethod
    def name(self) -> str:
        """Nombre legible de la fuente"""
        pass

    @abstractmethod
    def supports(self, source_id: str) -> bool:
        """True si esta fuente sabe descargar el identificador."""
        pass

    @abstractmethod
    def _obtener_observaciones(
        self,
        source_id: str,
        inicio: date,
        fin: date,
        period_id: str
    ) -> pd.Series:
        """
        Descarga las observaciones crudas.

        Returns:
            pd.Series indexada por fecha (puede venir sin colapsar)
        """
        pass

    def fetch(self, source_id: str, inicio: date, fin: date, period_id: str) -> pd.Series:
        """
        Descarga la serie y la colapsa a la granularidad pedida.

        Returns:
            pd.Series "Actual" con una observacion por periodo (ultimo valor),
            fechas a fin de periodo y dentro del rango.

        Raises:
            FetchFailedError: red, autenticacion, respuesta invalida o sin datos
        """
        offset = self.periods.pandas_offset(period_id)
        crudo = self._obtener_observaciones(source_id, inicio, fin, period_id)

        if crudo is None or len(crudo) == 0:
            raise FetchFailedError(f"{self.name} no devolvio observaciones", source_id=source_id)

        crudo = pd.to_numeric(crudo, errors='coerce').dropna()
        crudo.index = pd.to_datetime(crudo.index)
        colapsado = crudo.sort_index().resample(offset).last().dropna()

        serie = normalizar_serie(colapsado, inicio, fin, source_id=source_id)
        self.logger.info(
            f"{self.name}: {source_id} [{period_id}] {len(serie)} observaciones "
            f"({serie.index[0].date()} - {serie.index[-1].date()})"
        )
        return serie

    def _get_json(self, url: str, params: dict, source_id: str) -> dict:
        """GET con manejo uniforme de errores de red y HTTP."""
        try:
            response = self.client.get(url, params=params)
        except httpx.HTTPError as e:
            raise FetchFailedError(f"Error de red en {self.name}: {e}", source_id=source_id) from e

        if response.status_code >= 400:
            raise FetchFailedError(
                f"{self.name} respondio HTTP {response.status_code}",
                source_id=source_id,
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchFailedError(f"Respuesta no JSON de {self.name}", source_id=source_id) from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
