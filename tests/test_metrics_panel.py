"""Tests del panel de metricas de ajuste"""
import dash_bootstrap_components as dbc
import pytest

from forecast_dashboard.callbacks.dashboard_callbacks import construir_salidas
from forecast_dashboard.components.metrics_panel import (
    crear_panel_metricas,
    interpretar_mae,
    interpretar_mape,
)
from forecast_dashboard.ml.strategies import obtener_estrategia
from forecast_dashboard.services.pipeline import ForecastPipeline


def _textos(componente):
    """Recorre el arbol de componentes y junta los textos."""
    if componente is None:
        return []
    if isinstance(componente, str):
        return [componente]
    if isinstance(componente, (list, tuple)):
        return [t for hijo in componente for t in _textos(hijo)]
    return _textos(getattr(componente, "children", None))


def test_panel_con_las_tres_metricas():
    panel = crear_panel_metricas({"mae": 1.5, "rmse": 2.25, "mape": 8.0}, "ETS", media_historica=50.0)
    textos = _textos(panel)

    assert "Ajuste in-sample: ETS" in textos
    assert "1.50" in textos
    assert "2.25" in textos
    assert "8.0" in textos
    assert "Excelente (<10%)" in textos
    assert "Excelente (3% de media)" in textos


def test_panel_sin_metricas():
    panel = crear_panel_metricas({}, "Theta")
    assert panel.children == "Theta no expone metricas de ajuste"


def test_barra_del_mape():
    panel = crear_panel_metricas({"mae": 1.0, "rmse": 1.0, "mape": 35.0})
    fila = panel.children[1]
    card_mape = fila.children[2].children
    barra = card_mape.children[0].children[-1]
    assert isinstance(barra, dbc.Progress)
    assert barra.value == pytest.approx(65.0)
    assert barra.color == "danger"


@pytest.mark.parametrize("mape, esperado", [
    (5, "Excelente (<10%)"),
    (25, "Aceptable (20-30%)"),
    (80, "Considere otro modelo"),
])
def test_interpretar_mape(mape, esperado):
    assert interpretar_mape(mape) == esperado


def test_interpretar_mae_sin_media():
    assert interpretar_mae(3.0) == "Error medio absoluto"
    assert interpretar_mae(30.0, media=100.0) == "Alto (30% de media)"


def test_panel_desde_el_modelo_por_defecto(catalog, fetcher, seleccion_wti):
    estado = ForecastPipeline(catalog, fetcher, strategy_factory=obtener_estrategia).recalcular(seleccion_wti)

    *_, panel = construir_salidas(estado)
    textos = _textos(panel)
    assert "Ajuste in-sample: ETS" in textos
    assert "RMSE" in textos
