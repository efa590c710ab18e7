"""Tests de graficos y de la traduccion de PipelineState a salidas de Dash"""
import pandas as pd
import pytest
from dash import no_update

from forecast_dashboard.callbacks.dashboard_callbacks import construir_salidas
from forecast_dashboard.components.charts import (
    crear_figura_forecast,
    crear_figura_historica,
    crear_figura_no_disponible,
    tabla_forecast,
)
from forecast_dashboard.services.pipeline import ForecastPipeline
from forecast_dashboard.utils.exceptions import FetchFailedError
from forecast_dashboard.utils.plotly_helpers import crear_figura_error, crear_figura_vacia
from forecast_dashboard.utils.theme import COLORS

from conftest import FakeFetcher, FallaStrategy


@pytest.fixture
def estado_ok(catalog, fetcher, estrategia_constante, seleccion_wti):
    return ForecastPipeline(catalog, fetcher, strategy_factory=estrategia_constante).recalcular(seleccion_wti)


def test_figura_historica_titulada(serie_mensual):
    fig = crear_figura_historica(serie_mensual, "WTI oil")
    assert fig.layout.title.text == "WTI oil"
    assert len(fig.data) == 1
    assert len(fig.data[0].x) == len(serie_mensual)


def test_figura_forecast_con_ventana(estado_ok):
    fig = crear_figura_forecast(estado_ok.merged.value, "WTI oil", estado_ok.window, 0.95)
    nombres = [traza.name for traza in fig.data]
    assert nombres == ["Historico", "Intervalo 95%", "Pronostico"]
    assert list(fig.layout.xaxis.range) == ["2016-06-30", "2017-06-30"]
    assert fig.layout.xaxis.rangeslider.visible


def test_figura_forecast_sin_ventana(estado_ok):
    fig = crear_figura_forecast(estado_ok.merged.value, "WTI oil", None)
    assert fig.layout.xaxis.range is None


def test_figura_no_disponible():
    fig = crear_figura_no_disponible("Sin datos")
    assert fig.layout.annotations[0].text == "Sin datos"
    assert fig.layout.xaxis.visible is False
    assert fig.layout.yaxis.visible is False


def test_figuras_de_estado_no_fallan():
    assert crear_figura_vacia().layout.annotations[0].text == "Sin datos"
    assert crear_figura_error("Error").layout.annotations[0].font.color == COLORS["danger"]


def test_tabla_solo_fechas_futuras(estado_ok):
    filas = tabla_forecast(estado_ok.merged.value)
    assert len(filas) == 6
    assert filas[0]["fecha"] == "2017-01-31"
    assert filas[-1]["fecha"] == "2017-06-30"
    assert all(f["inferior"] <= f["pronostico"] <= f["superior"] for f in filas)


class TestConstruirSalidas:
    def test_estado_exitoso(self, estado_ok):
        fig_hist, fig_fc, alerta, filas, panel = construir_salidas(estado_ok)
        assert fig_hist.layout.title.text == "WTI oil"
        assert len(fig_fc.data) == 3
        assert fig_fc.layout.title.text == "WTI oil (Months): pronostico"
        assert alerta is None
        assert len(filas) == 6
        assert panel.children == "Constante no expone metricas de ajuste"

    def test_fetch_fallido_no_actualiza_graficos(self, catalog, estrategia_constante, seleccion_wti):
        fetcher = FakeFetcher(error=FetchFailedError("HTTP 404", status_code=404))
        estado = ForecastPipeline(catalog, fetcher, strategy_factory=estrategia_constante).recalcular(seleccion_wti)

        fig_hist, fig_fc, alerta, filas, panel = construir_salidas(estado)
        assert fig_hist is no_update
        assert fig_fc is no_update
        assert filas is no_update
        assert panel is no_update
        assert alerta.color == "warning"
        assert "no disponibles" in alerta.children

    def test_forecast_fallido_conserva_historico(self, catalog, fetcher, seleccion_wti):
        estado = ForecastPipeline(catalog, fetcher, strategy_factory=lambda n: FallaStrategy()).recalcular(seleccion_wti)

        fig_hist, fig_fc, alerta, filas, panel = construir_salidas(estado)
        assert len(fig_hist.data) == 1
        assert fig_fc.layout.annotations[0].text == "Pronostico no disponible"
        assert alerta.color == "danger"
        assert filas == []
        assert panel is None


def test_export_csv_del_merged(estado_ok):
    csv = estado_ok.merged.value.to_csv()
    encabezado = csv.splitlines()[0]
    assert encabezado == "fecha,Actual,Forecast,Upper,Lower"
    assert pd.Timestamp(csv.splitlines()[-1].split(",")[0]) == pd.Timestamp("2017-06-30")
