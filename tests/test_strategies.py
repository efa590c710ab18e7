"""Tests de las estrategias de forecasting"""
import numpy as np
import pandas as pd
import pytest

from forecast_dashboard.ml.strategies import (
    ARIMAStrategy,
    ETSStrategy,
    ForecastResult,
    ThetaStrategy,
    listar_estrategias,
    obtener_estrategia,
    obtener_opciones_modelos,
)
from forecast_dashboard.ml.strategies.base import ForecastStrategy
from forecast_dashboard.utils.exceptions import (
    ConfigurationError,
    ForecastFailedError,
    InsufficientDataError,
)

from conftest import FallaStrategy


@pytest.fixture
def serie_tendencia():
    rng = np.random.default_rng(42)
    fechas = pd.date_range("2007-01-31", periods=120, freq=pd.offsets.MonthEnd())
    valores = 50 + 0.3 * np.arange(120) + rng.normal(0, 1.5, 120)
    return pd.Series(valores, index=fechas)


@pytest.mark.parametrize("estrategia", [
    ETSStrategy(),
    ThetaStrategy(),
    ARIMAStrategy(order=(1, 1, 0)),
], ids=["ets", "theta", "arima"])
def test_pronostico_bien_formado(estrategia, serie_tendencia):
    resultado = estrategia.pronosticar(serie_tendencia, 6, nivel=0.95)

    assert resultado.horizon == 6
    assert np.isfinite(resultado.point_forecast).all()
    assert (resultado.lower_bound <= resultado.point_forecast).all()
    assert (resultado.point_forecast <= resultado.upper_bound).all()
    assert resultado.modelo == estrategia.nombre_modelo
    assert estrategia.is_trained


def test_ets_sigue_la_tendencia(serie_tendencia):
    resultado = ETSStrategy().pronosticar(serie_tendencia, 3)
    assert resultado.point_forecast[0] > serie_tendencia.iloc[:60].mean()
    assert 'mae' in resultado.metricas


def test_intervalo_mas_ancho_con_mas_confianza(serie_tendencia):
    r80 = ETSStrategy().pronosticar(serie_tendencia, 4, nivel=0.80)
    r95 = ETSStrategy().pronosticar(serie_tendencia, 4, nivel=0.95)
    ancho80 = r80.upper_bound - r80.lower_bound
    ancho95 = r95.upper_bound - r95.lower_bound
    assert (ancho95 > ancho80).all()


def test_arima_selecciona_orden(serie_tendencia):
    estrategia = ARIMAStrategy()
    estrategia.pronosticar(serie_tendencia.iloc[:40], 2)
    assert estrategia.order[1] == 1


def test_datos_insuficientes():
    with pytest.raises(InsufficientDataError) as exc:
        ETSStrategy().pronosticar(pd.Series([1.0, 2.0, 3.0]), 3)
    assert exc.value.available == 3


def test_horizonte_invalido(serie_tendencia):
    with pytest.raises(ForecastFailedError):
        ETSStrategy().pronosticar(serie_tendencia, 0)


def test_error_del_modelo_se_envuelve(serie_tendencia):
    with pytest.raises(ForecastFailedError) as exc:
        FallaStrategy().pronosticar(serie_tendencia, 3)
    assert "matriz singular" in exc.value.message


def test_valores_no_finitos_se_rechazan(serie_tendencia):
    class NaNStrategy(ForecastStrategy):
        @property
        def nombre_modelo(self):
            return "NaN"

        def _ajustar_y_predecir(self, valores, horizonte, nivel):
            pred = np.full(horizonte, np.nan)
            return pred, pred, pred, None

    with pytest.raises(ForecastFailedError):
        NaNStrategy().pronosticar(serie_tendencia, 3)


def test_resultado_desalineado():
    with pytest.raises(ForecastFailedError):
        ForecastResult(np.ones(3), np.ones(2), np.ones(3))


class TestRegistro:
    def test_estrategias_registradas(self):
        assert listar_estrategias() == ['ets', 'arima', 'theta']

    def test_obtener_estrategia(self):
        assert isinstance(obtener_estrategia('ets'), ETSStrategy)

    def test_estrategia_desconocida(self):
        with pytest.raises(ConfigurationError):
            obtener_estrategia('prophet')

    def test_opciones_del_dropdown(self):
        opciones = obtener_opciones_modelos()
        assert [o['value'] for o in opciones] == ['ets', 'arima', 'theta']
        assert all(o['label'] and o['title'] for o in opciones)
