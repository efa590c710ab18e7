"""
Pipeline de Orquestacion para Forecast Dashboard

Recalcula, para cada seleccion, las celdas derivadas en orden fijo:
1. Fetched          serie historica descargada
2. FutureTimestamps fechas futuras a partir del fin del rango
3. Forecast         pronostico puntual + intervalo
4. Merged           historia y pronostico combinados por fecha

Cada celda se memoriza por un hash de sus entradas directas. Un fallo en
Fetched deja Forecast y Merged como "unavailable" sin invocarlos; ningun
error de los colaboradores externos escapa de `recalcular`.
"""
import hashlib
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Tuple

import pandas as pd
from loguru import logger

from forecast_dashboard.ml.strategies import ForecastResult, ForecastStrategy, obtener_estrategia
from forecast_dashboard.registry.catalog import Catalog
from forecast_dashboard.registry.periods import PeriodVocabulary
from forecast_dashboard.services.selection import SelectionState
from forecast_dashboard.services.window import calcular_ventana
from forecast_dashboard.utils.constants import (
    COLUMNA_INFERIOR,
    COLUMNA_PRONOSTICO,
    COLUMNA_REAL,
    COLUMNA_SUPERIOR,
    COLUMNAS_COMBINADAS,
    MAX_CACHE_CELDA,
)
from forecast_dashboard.utils.exceptions import (
    ForecastDashboardError,
    MergeIntegrityError,
)


class SeriesFetcher(Protocol):
    """Cualquier objeto con `fetch` (ej: SourceManager)"""

    def fetch(self, source_id: str, inicio, fin, period_id: str) -> pd.Series:
        ...


class CellStatus(str, Enum):
    OK = "ok"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


@dataclass(frozen=True)
class CellState:
    """Estado de una celda derivada"""
    status: CellStatus
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, value) -> "CellState":
        return cls(CellStatus.OK, value=value)

    @classmethod
    def unavailable(cls, motivo: str = None) -> "CellState":
        return cls(CellStatus.UNAVAILABLE, error=motivo)

    @classmethod
    def failed(cls, error: str) -> "CellState":
        return cls(CellStatus.FAILED, error=error)

    @property
    def disponible(self) -> bool:
        return self.status == CellStatus.OK


@dataclass(frozen=True)
class PipelineState:
    """Resultado completo y consistente de un recalculo"""
    selection: SelectionState
    version: int
    titulo: str
    granularidad: str
    fetched: CellState
    future_timestamps: CellState
    forecast: CellState
    merged: CellState
    window: Optional[Tuple[pd.Timestamp, pd.Timestamp]] = None
    duracion: float = 0.0
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def exito(self) -> bool:
        return self.merged.disponible

    def resumen(self) -> dict:
        return {
            'version': self.version,
            'fetched': self.fetched.status.value,
            'forecast': self.forecast.status.value,
            'merged': self.merged.status.value,
            'duracion': round(self.duracion, 3),
        }


# =============================================================================
# Funciones puras
# =============================================================================

def generar_fechas_futuras(
    range_end,
    period_id: str,
    horizon: int,
    periods: PeriodVocabulary
) -> pd.DatetimeIndex:
    """
    Exactamente `horizon` fechas estrictamente crecientes; la primera es un
    paso de calendario despues de `range_end`.
    """
    fechas = [periods.step(range_end, period_id, i) for i in range(1, horizon + 1)]
    return pd.DatetimeIndex(fechas, name="fecha")


def combinar_series(
    fetched: pd.Series,
    fechas_futuras: pd.DatetimeIndex,
    forecast: ForecastResult
) -> pd.DataFrame:
    """
    Union por fecha de la historia ("Actual") y el pronostico
    ("Forecast", "Upper", "Lower").

    Las filas historicas tienen nulos en las columnas de pronostico y
    viceversa.

    Raises:
        MergeIntegrityError: largos desalineados o fechas solapadas
    """
    if len(fechas_futuras) != forecast.horizon:
        raise MergeIntegrityError(
            f"{len(fechas_futuras)} fechas futuras para {forecast.horizon} valores pronosticados"
        )

    solapadas = fetched.index.intersection(fechas_futuras)
    if len(solapadas) > 0:
        raise MergeIntegrityError(
            "Fechas futuras solapadas con la historia",
            overlapping=len(solapadas)
        )

    historico = fetched.rename(COLUMNA_REAL).to_frame()
    futuro = pd.DataFrame(
        {
            COLUMNA_PRONOSTICO: forecast.point_forecast,
            COLUMNA_SUPERIOR: forecast.upper_bound,
            COLUMNA_INFERIOR: forecast.lower_bound,
        },
        index=fechas_futuras
    )

    combinado = pd.concat([historico, futuro], axis=0, sort=False)
    combinado = combinado.sort_index().reindex(columns=COLUMNAS_COMBINADAS)
    combinado.index.name = "fecha"

    if not (combinado.index.is_monotonic_increasing and combinado.index.is_unique):
        raise MergeIntegrityError("La serie combinada no es estrictamente creciente")

    return combinado


# =============================================================================
# Memoizacion por celda
# =============================================================================

class _CacheCelda:
    """LRU pequeno y thread-safe; solo guarda resultados exitosos."""

    def __init__(self, max_size: int = MAX_CACHE_CELDA):
        self.max_size = max_size
        self._datos: "OrderedDict[str, Any]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0

    def get(self, clave: str):
        with self._lock:
            if clave not in self._datos:
                return None
            self._datos.move_to_end(clave)
            self.hits += 1
            return self._datos[clave]

    def put(self, clave: str, valor) -> None:
        with self._lock:
            self._datos[clave] = valor
            self._datos.move_to_end(clave)
            while len(self._datos) > self.max_size:
                self._datos.popitem(last=False)

    def __len__(self) -> int:
        return len(self._datos)


def _hash(*partes: str) -> str:
    return hashlib.sha256("|".join(partes).encode('utf-8')).hexdigest()


# =============================================================================
# Pipeline
# =============================================================================

class ForecastPipeline:
    """
    Grafo de dependencias explicito: seleccion -> Fetched -> Forecast -> Merged.

    Cada sesion tiene su propio pipeline (y su propia cache); el catalogo
    y las fuentes son inmutables y pueden compartirse.

    Ejemplo de uso:
        pipeline = ForecastPipeline(obtener_catalogo(), SourceManager.desde_settings(periods))
        estado = pipeline.recalcular(selection)
        if estado.exito:
            estado.merged.value  # DataFrame Actual/Forecast/Upper/Lower
    """

    CAMPOS_FETCH = ('source_id', 'period_id', 'range_start', 'range_end')
    CAMPOS_FORECAST = ('horizon', 'model', 'level')

    def __init__(
        self,
        catalog: Catalog,
        fetcher: SeriesFetcher,
        strategy_factory: Callable[[str], ForecastStrategy] = obtener_estrategia,
        cache_size: int = MAX_CACHE_CELDA
    ):
        self.catalog = catalog
        self.fetcher = fetcher
        self.strategy_factory = strategy_factory
        self._cache_fetch = _CacheCelda(cache_size)
        self._cache_forecast = _CacheCelda(cache_size)

    # ------------------------------------------------------------------
    # Celdas
    # ------------------------------------------------------------------

    def _celda_fetched(self, selection: SelectionState) -> Tuple[CellState, str]:
        clave = selection.clave(*self.CAMPOS_FETCH)
        serie = self._cache_fetch.get(clave)
        if serie is not None:
            logger.debug(f"Fetched desde cache: {selection.source_id}")
            return CellState.ok(serie), clave

        try:
            serie = self.fetcher.fetch(
                selection.source_id,
                selection.range_start,
                selection.range_end,
                selection.period_id
            )
        except ForecastDashboardError as e:
            logger.warning(f"Descarga fallida para {selection.source_id}: {e}")
            return CellState.failed(e.message), clave
        except Exception as e:
            logger.exception(f"Error inesperado descargando {selection.source_id}")
            return CellState.failed(f"Error inesperado: {e}"), clave

        self._cache_fetch.put(clave, serie)
        return CellState.ok(serie), clave

    def _celda_future(self, selection: SelectionState) -> CellState:
        try:
            fechas = generar_fechas_futuras(
                selection.range_end, selection.period_id, selection.horizon, self.catalog.periods
            )
        except ForecastDashboardError as e:
            logger.warning(f"No se pudieron generar fechas futuras: {e}")
            return CellState.failed(e.message)
        return CellState.ok(fechas)

    def _celda_forecast(self, selection: SelectionState, serie: pd.Series, clave_fetch: str) -> CellState:
        clave = _hash(clave_fetch, selection.clave(*self.CAMPOS_FORECAST))
        resultado = self._cache_forecast.get(clave)
        if resultado is not None:
            logger.debug(f"Forecast desde cache: {selection.source_id}/{selection.model}")
            return CellState.ok(resultado)

        try:
            estrategia = self.strategy_factory(selection.model)
            resultado = estrategia.pronosticar(serie, selection.horizon, selection.level)
        except ForecastDashboardError as e:
            logger.warning(f"Forecast fallido ({selection.model}): {e}")
            return CellState.failed(e.message)
        except Exception as e:
            logger.exception(f"Error inesperado en forecast ({selection.model})")
            return CellState.failed(f"Error inesperado: {e}")

        self._cache_forecast.put(clave, resultado)
        return CellState.ok(resultado)

    @staticmethod
    def _celda_merged(fetched: CellState, future: CellState, forecast: CellState) -> CellState:
        if not forecast.disponible:
            return CellState.unavailable("Pronostico no disponible")
        if not future.disponible:
            return CellState.unavailable("Fechas futuras no disponibles")
        try:
            return CellState.ok(combinar_series(fetched.value, future.value, forecast.value))
        except MergeIntegrityError as e:
            logger.error(f"Serie combinada invalida: {e}")
            return CellState.failed(e.message)

    # ------------------------------------------------------------------
    # Recalculo
    # ------------------------------------------------------------------

    def recalcular(self, selection: SelectionState, version: int = 0) -> PipelineState:
        """
        Evalua todas las celdas para la seleccion, en orden de dependencias.

        Nunca lanza por fallos de los colaboradores: los fallos quedan en el
        estado de la celda correspondiente.

        Raises:
            UnknownIdentifierError: si la seleccion no pertenece al catalogo
        """
        inicio = time.time()
        titulo = self.catalog.series.resolve_label(selection.source_id)
        granularidad = self.catalog.periods.display_label(selection.period_id)
        warnings_list = []

        future = self._celda_future(selection)
        fetched, clave_fetch = self._celda_fetched(selection)

        if fetched.disponible:
            forecast = self._celda_forecast(selection, fetched.value, clave_fetch)
            merged = self._celda_merged(fetched, future, forecast)
        else:
            forecast = CellState.unavailable("Datos no disponibles")
            merged = CellState.unavailable("Datos no disponibles")

        if forecast.status == CellStatus.FAILED:
            warnings_list.append(f"Pronostico no disponible: {forecast.error}")

        window = calcular_ventana(selection, future.value if future.disponible else None)

        estado = PipelineState(
            selection=selection,
            version=version,
            titulo=titulo,
            granularidad=granularidad,
            fetched=fetched,
            future_timestamps=future,
            forecast=forecast,
            merged=merged,
            window=window,
            duracion=time.time() - inicio,
            warnings=tuple(warnings_list),
        )
        logger.info(f"Pipeline {titulo} [{selection.period_id}, h={selection.horizon}]: {estado.resumen()}")
        return estado
