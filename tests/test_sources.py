"""Tests de las fuentes HTTP con httpx.MockTransport"""
from datetime import date

import httpx
import numpy as np
import pandas as pd
import pytest

from forecast_dashboard.data.sources import (
    FREDSource,
    NasdaqDataLinkSource,
    SourceManager,
    normalizar_serie,
)
from forecast_dashboard.utils.exceptions import FetchFailedError


def _cliente(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _respuesta_fred(request):
    return httpx.Response(200, json={
        "observations": [
            {"date": "2016-11-15", "value": "45.0"},
            {"date": "2016-11-30", "value": "46.0"},
            {"date": "2016-12-01", "value": "."},
            {"date": "2016-12-30", "value": "53.7"},
        ]
    })


class TestFRED:
    def test_colapsa_a_fin_de_mes(self, catalog):
        peticiones = []

        def handler(request):
            peticiones.append(request)
            return _respuesta_fred(request)

        fuente = FREDSource(catalog.periods, api_key="k", client=_cliente(handler))
        serie = fuente.fetch("FRED/DCOILWTICO", date(2016, 11, 1), date(2016, 12, 31), "monthly")

        assert list(serie.index) == [pd.Timestamp("2016-11-30"), pd.Timestamp("2016-12-31")]
        assert list(serie.values) == [46.0, 53.7]
        assert serie.name == "Actual"
        params = peticiones[0].url.params
        assert params["series_id"] == "DCOILWTICO"
        assert params["observation_end"] == "2016-12-31"

    def test_periodo_parcial_se_descarta(self, catalog):
        fuente = FREDSource(catalog.periods, api_key="k", client=_cliente(_respuesta_fred))
        serie = fuente.fetch("FRED/DCOILWTICO", date(2016, 11, 1), date(2016, 12, 15), "monthly")
        assert list(serie.index) == [pd.Timestamp("2016-11-30")]

    def test_sin_api_key(self, catalog):
        fuente = FREDSource(catalog.periods, api_key=None, client=_cliente(_respuesta_fred))
        with pytest.raises(FetchFailedError):
            fuente.fetch("FRED/DCOILWTICO", date(2016, 1, 1), date(2016, 12, 31), "monthly")

    def test_error_http(self, catalog):
        fuente = FREDSource(catalog.periods, api_key="k",
                            client=_cliente(lambda request: httpx.Response(500, text="error")))
        with pytest.raises(FetchFailedError) as exc:
            fuente.fetch("FRED/DCOILWTICO", date(2016, 1, 1), date(2016, 12, 31), "monthly")
        assert exc.value.status_code == 500

    def test_error_de_red(self, catalog):
        def handler(request):
            raise httpx.ConnectError("sin conexion", request=request)

        fuente = FREDSource(catalog.periods, api_key="k", client=_cliente(handler))
        with pytest.raises(FetchFailedError):
            fuente.fetch("FRED/DCOILWTICO", date(2016, 1, 1), date(2016, 12, 31), "monthly")

    def test_mensaje_de_error_de_la_api(self, catalog):
        fuente = FREDSource(catalog.periods, api_key="k", client=_cliente(
            lambda request: httpx.Response(200, json={"error_message": "Bad Request. The series does not exist."})
        ))
        with pytest.raises(FetchFailedError):
            fuente.fetch("FRED/NOEXISTE", date(2016, 1, 1), date(2016, 12, 31), "monthly")

    def test_sin_observaciones(self, catalog):
        fuente = FREDSource(catalog.periods, api_key="k",
                            client=_cliente(lambda request: httpx.Response(200, json={"observations": []})))
        with pytest.raises(FetchFailedError):
            fuente.fetch("FRED/DCOILWTICO", date(2016, 1, 1), date(2016, 12, 31), "monthly")

    def test_respuesta_no_json(self, catalog):
        fuente = FREDSource(catalog.periods, api_key="k",
                            client=_cliente(lambda request: httpx.Response(200, text="<html>")))
        with pytest.raises(FetchFailedError):
            fuente.fetch("FRED/DCOILWTICO", date(2016, 1, 1), date(2016, 12, 31), "monthly")


class TestNasdaq:
    def test_columna_configurada_y_collapse(self, catalog):
        peticiones = []

        def handler(request):
            peticiones.append(request)
            return httpx.Response(200, json={
                "dataset_data": {
                    "column_names": ["Date", "USD (AM)", "USD (PM)"],
                    "data": [["2016-11-30", 1170.0, 1178.1], ["2016-12-30", 1150.0, 1145.9]],
                }
            })

        fuente = NasdaqDataLinkSource(catalog.periods, api_key="k", client=_cliente(handler))
        serie = fuente.fetch("LBMA/GOLD", date(2016, 11, 1), date(2016, 12, 31), "monthly")

        assert list(serie.values) == [1178.1, 1145.9]
        assert serie.index[-1] == pd.Timestamp("2016-12-31")
        assert peticiones[0].url.params["collapse"] == "monthly"
        assert peticiones[0].url.path.endswith("/datasets/LBMA/GOLD/data.json")

    def test_error_de_la_api(self, catalog):
        fuente = NasdaqDataLinkSource(catalog.periods, client=_cliente(
            lambda request: httpx.Response(200, json={"quandl_error": {"code": "QECx02", "message": "not found"}})
        ))
        with pytest.raises(FetchFailedError):
            fuente.fetch("LBMA/GOLD", date(2016, 1, 1), date(2016, 12, 31), "monthly")


class TestSourceManager:
    def test_enrutamiento(self, catalog):
        fred = FREDSource(catalog.periods, api_key="k")
        nasdaq = NasdaqDataLinkSource(catalog.periods)
        manager = SourceManager([fred, nasdaq])
        assert manager.fuente_para("FRED/DCOILWTICO") is fred
        assert manager.fuente_para("LBMA/GOLD") is nasdaq

    def test_id_sin_fuente(self, catalog):
        manager = SourceManager([FREDSource(catalog.periods, api_key="k")])
        with pytest.raises(FetchFailedError):
            manager.fetch("LBMA/GOLD", date(2016, 1, 1), date(2016, 12, 31), "monthly")


class TestNormalizarSerie:
    def test_ordena_deduplica_y_filtra(self):
        crudo = pd.Series(
            [3.0, 1.0, np.nan, 2.0, 5.0],
            index=pd.to_datetime(["2016-03-31", "2016-01-31", "2016-02-29", "2016-01-31", "2017-01-31"])
        )
        serie = normalizar_serie(crudo, date(2016, 1, 1), date(2016, 12, 31))
        assert list(serie.index) == [pd.Timestamp("2016-01-31"), pd.Timestamp("2016-03-31")]
        assert list(serie.values) == [2.0, 3.0]

    def test_vacia_falla(self):
        with pytest.raises(FetchFailedError):
            normalizar_serie(pd.Series(dtype=float), date(2016, 1, 1), date(2016, 12, 31))
