"""Tests de la construccion y validacion de SelectionState"""
from datetime import date

import pytest

from forecast_dashboard.services.selection import SelectionState
from forecast_dashboard.utils.exceptions import SelectionValidationError


def _desde_inputs(catalog, **overrides):
    valores = dict(
        source_id="FRED/DCOILWTICO",
        period_id="monthly",
        range_start="1980-01-01",
        range_end="2016-12-31",
        horizon=6,
    )
    valores.update(overrides)
    return SelectionState.desde_inputs(catalog=catalog, **valores)


def test_inputs_validos(catalog):
    seleccion = _desde_inputs(catalog)
    assert seleccion.range_start == date(1980, 1, 1)
    assert seleccion.range_end == date(2016, 12, 31)
    assert seleccion.horizon == 6
    assert seleccion.model == "ets"
    assert seleccion.level == 0.95


def test_fechas_con_hora_del_datepicker(catalog):
    seleccion = _desde_inputs(catalog, range_end="2016-12-31T00:00:00")
    assert seleccion.range_end == date(2016, 12, 31)


def test_horizonte_como_float_entero(catalog):
    assert _desde_inputs(catalog, horizon=12.0).horizon == 12


@pytest.mark.parametrize("horizonte", [0, 101, 2.5, None, "abc"])
def test_horizonte_invalido(catalog, horizonte):
    with pytest.raises(SelectionValidationError) as exc:
        _desde_inputs(catalog, horizon=horizonte)
    assert exc.value.field == "horizon"


def test_limites_del_horizonte(catalog):
    assert _desde_inputs(catalog, horizon=1).horizon == 1
    assert _desde_inputs(catalog, horizon=100).horizon == 100


def test_rango_invertido(catalog):
    with pytest.raises(SelectionValidationError) as exc:
        _desde_inputs(catalog, range_start="2017-01-01", range_end="2016-12-31")
    assert exc.value.field == "range_start"


def test_fecha_faltante(catalog):
    with pytest.raises(SelectionValidationError):
        _desde_inputs(catalog, range_end=None)


def test_serie_desconocida(catalog):
    with pytest.raises(SelectionValidationError) as exc:
        _desde_inputs(catalog, source_id="FRED/NOEXISTE")
    assert exc.value.field == "source_id"


def test_granularidad_desconocida(catalog):
    with pytest.raises(SelectionValidationError) as exc:
        _desde_inputs(catalog, period_id="hourly")
    assert exc.value.field == "period_id"


def test_modelo_fuera_de_la_lista(catalog):
    with pytest.raises(SelectionValidationError):
        _desde_inputs(catalog, model="prophet", modelos_validos=["ets", "arima"])


def test_nivel_fuera_de_rango(catalog):
    with pytest.raises(SelectionValidationError):
        _desde_inputs(catalog, level=1.5)


@pytest.mark.parametrize("nivel", ["alto", [0.9], {}])
def test_nivel_no_numerico(catalog, nivel):
    with pytest.raises(SelectionValidationError) as exc:
        _desde_inputs(catalog, level=nivel)
    assert exc.value.field == "level"


def test_nivel_como_texto(catalog):
    assert _desde_inputs(catalog, level="0.8").level == 0.8


def test_clave_por_campos(catalog):
    a = _desde_inputs(catalog, horizon=6)
    b = _desde_inputs(catalog, horizon=12)
    campos_fetch = ("source_id", "period_id", "range_start", "range_end")
    assert a.clave(*campos_fetch) == b.clave(*campos_fetch)
    assert a.clave() != b.clave()


def test_seleccion_inmutable(seleccion_wti):
    with pytest.raises(AttributeError):
        seleccion_wti.horizon = 12
