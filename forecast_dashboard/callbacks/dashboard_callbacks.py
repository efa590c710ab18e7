"""
Callbacks del Tablero de Pronostico
===================================

Un unico callback recalcula ante cualquier cambio de los controles. Ambos
graficos y la tabla se dibujan desde el mismo PipelineState confirmado de
la sesion, de modo que nunca muestran selecciones distintas.
"""
from datetime import datetime
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Input, Output, State, callback, dcc, no_update
from dash.exceptions import PreventUpdate

from forecast_dashboard.components.charts import (
    MENSAJE_NO_DISPONIBLE,
    crear_figura_forecast,
    crear_figura_historica,
    crear_figura_no_disponible,
    tabla_forecast,
)
from forecast_dashboard.components.metrics_panel import crear_panel_metricas
from forecast_dashboard.data.sources import SourceManager
from forecast_dashboard.ml.strategies import listar_estrategias
from forecast_dashboard.registry.catalog import obtener_catalogo
from forecast_dashboard.services.pipeline import CellStatus, ForecastPipeline, PipelineState
from forecast_dashboard.services.selection import SelectionState
from forecast_dashboard.services.session import SessionStore
from forecast_dashboard.utils.exceptions import SelectionValidationError
from forecast_dashboard.utils.logger import get_logger
from forecast_dashboard.utils.plotly_helpers import crear_figura_error

logger = get_logger(__name__)

# Instancias globales: almacen de sesiones y fuentes compartidas
_session_store = None
_source_manager = None


def _crear_pipeline() -> ForecastPipeline:
    catalogo = obtener_catalogo()
    return ForecastPipeline(catalogo, _obtener_source_manager(catalogo))


def _obtener_source_manager(catalogo) -> SourceManager:
    """Las fuentes no guardan estado por sesion; se comparten."""
    global _source_manager
    if _source_manager is None:
        _source_manager = SourceManager.desde_settings(catalogo.periods)
    return _source_manager


def get_session_store() -> SessionStore:
    """Obtiene instancia singleton del SessionStore."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(_crear_pipeline)
    return _session_store


def _alerta(mensaje: str, color: str = "warning") -> dbc.Alert:
    return dbc.Alert(mensaje, color=color, className="py-2 mb-0")


def construir_salidas(estado: PipelineState) -> tuple:
    """
    Traduce un PipelineState a (figura historica, figura forecast, alerta, filas, metricas).

    - Fetched fallido: los graficos no se tocan; solo se muestra la alerta.
    - Forecast fallido: el historico se dibuja y el pronostico muestra el error.
    """
    seleccion = estado.selection

    if not estado.fetched.disponible:
        mensaje = f"{MENSAJE_NO_DISPONIBLE}: {estado.fetched.error}"
        return no_update, no_update, _alerta(mensaje), no_update, no_update

    fig_historica = crear_figura_historica(estado.fetched.value, estado.titulo)

    if estado.forecast.status == CellStatus.FAILED:
        return (
            fig_historica,
            crear_figura_error("Pronostico no disponible"),
            _alerta(f"Pronostico no disponible: {estado.forecast.error}", color="danger"),
            [],
            None,
        )

    if not estado.merged.disponible:
        return (
            fig_historica,
            crear_figura_no_disponible(estado.merged.error or MENSAJE_NO_DISPONIBLE),
            _alerta(estado.merged.error or MENSAJE_NO_DISPONIBLE),
            [],
            None,
        )

    merged = estado.merged.value
    etiqueta = f"{estado.titulo} ({estado.granularidad})"
    fig_forecast = crear_figura_forecast(merged, etiqueta, estado.window, seleccion.level)
    alerta = _alerta(" | ".join(estado.warnings)) if estado.warnings else None

    resultado = estado.forecast.value
    panel = crear_panel_metricas(
        resultado.metricas, resultado.modelo, media_historica=float(estado.fetched.value.mean())
    )
    return fig_historica, fig_forecast, alerta, tabla_forecast(merged), panel


@callback(
    Output("grafico-historico", "figure"),
    Output("grafico-forecast", "figure"),
    Output("alerta-dashboard", "children"),
    Output("tabla-pronostico", "rowData"),
    Output("panel-metricas", "children"),
    Output("store-session-id", "data"),
    Input("select-serie", "value"),
    Input("select-periodo", "value"),
    Input("rango-fechas", "start_date"),
    Input("rango-fechas", "end_date"),
    Input("input-horizonte", "value"),
    Input("select-modelo", "value"),
    Input("select-confianza", "value"),
    State("store-session-id", "data"),
)
def actualizar_dashboard(source_id, period_id, start_date, end_date, horizonte,
                         modelo, confianza, session_id: Optional[str]):
    """Recalcula la sesion y redibuja ambos graficos."""
    sesion = get_session_store().obtener(session_id)

    try:
        seleccion = SelectionState.desde_inputs(
            source_id, period_id, start_date, end_date, horizonte,
            catalog=obtener_catalogo(),
            model=modelo,
            level=confianza,
            modelos_validos=listar_estrategias(),
        )
    except SelectionValidationError as e:
        logger.info(f"Seleccion invalida ({e.field}): {e.message}")
        return no_update, no_update, _alerta(e.message, color="danger"), no_update, no_update, sesion.session_id

    estado = sesion.enviar(seleccion)
    if estado is None:
        # Otra seleccion mas reciente ya reemplazo a esta
        raise PreventUpdate

    return (*construir_salidas(estado), sesion.session_id)


@callback(
    Output("download-csv", "data"),
    Input("btn-exportar-csv", "n_clicks"),
    State("store-session-id", "data"),
    prevent_initial_call=True
)
def exportar_csv(n_clicks, session_id):
    """Exporta la serie combinada del estado confirmado de la sesion."""
    if not session_id or session_id not in get_session_store():
        return no_update

    estado = get_session_store().obtener(session_id).estado_actual
    if estado is None or not estado.merged.disponible:
        return no_update

    nombre = estado.selection.source_id.replace('/', '_')
    fecha_str = datetime.now().strftime('%Y%m%d_%H%M')
    filename = f"forecast_{nombre}_{fecha_str}.csv"
    logger.info(f"CSV exportado: {filename}")
    return dcc.send_data_frame(estado.merged.value.to_csv, filename)
