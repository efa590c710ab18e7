"""Tests de la ventana visible del grafico de pronostico"""
import pandas as pd

from forecast_dashboard.services.window import calcular_ventana


def test_ventana_escenario_mensual(seleccion_wti):
    futuras = pd.date_range("2017-01-31", periods=6, freq=pd.offsets.MonthEnd())
    inicio, fin = calcular_ventana(seleccion_wti, futuras)
    assert inicio == pd.Timestamp("2016-06-30")
    assert fin == pd.Timestamp("2017-06-30")


def test_ventana_con_otro_alcance(seleccion_wti):
    futuras = [pd.Timestamp("2017-01-31")]
    inicio, _ = calcular_ventana(seleccion_wti, futuras, meses_atras=12)
    assert inicio == pd.Timestamp("2015-12-31")


def test_sin_fechas_futuras(seleccion_wti):
    assert calcular_ventana(seleccion_wti, []) is None
    assert calcular_ventana(seleccion_wti, None) is None
