"""
Fixtures compartidas: catalogo, fuente falsa, estrategia falsa y series de ejemplo.
"""
import os
import tempfile

# Los logs de la suite no ensucian el directorio del proyecto
os.environ.setdefault("FORECAST_LOG_DIR", tempfile.mkdtemp(prefix="forecast_logs_"))

from datetime import date  # noqa: E402
import threading  # noqa: E402

import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from forecast_dashboard.ml.strategies.base import ForecastStrategy  # noqa: E402
from forecast_dashboard.registry.catalog import construir_catalogo  # noqa: E402
from forecast_dashboard.services.selection import SelectionState  # noqa: E402
from forecast_dashboard.utils.exceptions import FetchFailedError  # noqa: E402


class FakeFetcher:
    """Devuelve series precargadas por id y cuenta las llamadas."""

    def __init__(self, series=None, error=None):
        self.series = series or {}
        self.error = error
        self.llamadas = []
        self._lock = threading.Lock()

    def fetch(self, source_id, inicio, fin, period_id):
        with self._lock:
            self.llamadas.append((source_id, inicio, fin, period_id))
        if self.error is not None:
            raise self.error
        if source_id not in self.series:
            raise FetchFailedError(f"Serie no encontrada: {source_id}", source_id=source_id, status_code=404)
        serie = self.series[source_id]
        return serie[(serie.index >= pd.Timestamp(inicio)) & (serie.index <= pd.Timestamp(fin))]


class ConstanteStrategy(ForecastStrategy):
    """Repite el ultimo valor; intervalo +/- 1."""

    min_registros = 3
    llamadas = 0

    @property
    def nombre_modelo(self) -> str:
        return "Constante"

    def _ajustar_y_predecir(self, valores, horizonte, nivel):
        ConstanteStrategy.llamadas += 1
        pred = np.full(horizonte, valores[-1])
        return pred, pred - 1.0, pred + 1.0, None


class FallaStrategy(ForecastStrategy):
    """Siempre falla al ajustar."""

    @property
    def nombre_modelo(self) -> str:
        return "Falla"

    def _ajustar_y_predecir(self, valores, horizonte, nivel):
        raise np.linalg.LinAlgError("matriz singular")


@pytest.fixture
def catalog():
    return construir_catalogo()


@pytest.fixture
def serie_mensual():
    """WTI mensual sintetico 1980-01 a 2016-12 (fin de mes)"""
    fechas = pd.date_range("1980-01-31", "2016-12-31", freq=pd.offsets.MonthEnd(), name="fecha")
    valores = 30 + 10 * np.sin(np.arange(len(fechas)) / 12.0) + np.linspace(0, 20, len(fechas))
    return pd.Series(valores, index=fechas, name="Actual")


@pytest.fixture
def fetcher(serie_mensual):
    return FakeFetcher({"FRED/DCOILWTICO": serie_mensual})


@pytest.fixture
def estrategia_constante():
    ConstanteStrategy.llamadas = 0

    def factory(nombre):
        return ConstanteStrategy()

    return factory


@pytest.fixture
def seleccion_wti():
    return SelectionState(
        source_id="FRED/DCOILWTICO",
        period_id="monthly",
        range_start=date(1980, 1, 1),
        range_end=date(2016, 12, 31),
        horizon=6,
    )
