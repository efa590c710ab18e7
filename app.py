"""
Forecast Dashboard - Pronostico de series economicas
====================================================
Aplicacion Dash: series de commodities y macro, pronostico con intervalo
de confianza y exportacion a CSV.
"""
import sys

import dash_bootstrap_components as dbc
from dash import Dash, Input, Output, State, callback, ctx, html
from loguru import logger

from forecast_dashboard.config import get_settings
from forecast_dashboard.registry.catalog import obtener_catalogo
from forecast_dashboard.utils.constants import MODELOS_ML

settings = get_settings()

# Configuracion de logging
logger.remove()
logger.add(
    sys.stdout,
    format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
    level=settings.log_level,
    colorize=True
)

# Un catalogo roto debe fallar aqui, antes de aceptar sesiones
catalogo = obtener_catalogo()

app = Dash(
    __name__,
    external_stylesheets=[
        dbc.themes.BOOTSTRAP,
        "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"
    ],
    suppress_callback_exceptions=True,
    title="Forecast Dashboard",
    update_title="Cargando..."
)

server = app.server

# Importar pagina y callbacks (registra los callbacks)
from forecast_dashboard.pages import dashboard  # noqa: E402
from forecast_dashboard.callbacks import dashboard_callbacks  # noqa: E402,F401


def create_info_modal():
    """Modal con informacion de series y modelos"""
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle("Informacion de la Aplicacion"), close_button=True),
        dbc.ModalBody([
            html.H5("Series disponibles", className="text-primary mb-3"),
            html.Ul([
                html.Li([html.Strong(f"{entry.display_label}: "), entry.external_id])
                for entry in catalogo.series
            ], className="mb-4"),

            html.H5("Modelos de pronostico", className="text-primary mb-3"),
            html.Ul([
                html.Li([html.Strong(f"{info['nombre']}: "), info['tooltip']])
                for info in MODELOS_ML.values()
            ], className="mb-4"),

            dbc.Alert(
                "El grafico de pronostico muestra por defecto los ultimos 6 meses del rango "
                "mas el horizonte; use el selector inferior para ver la serie completa.",
                color="info", className="mb-0"
            ),
        ]),
        dbc.ModalFooter(
            dbc.Button("Cerrar", id="btn-cerrar-info-modal", className="ms-auto")
        ),
    ], id="modal-info", size="lg", scrollable=True)


def create_layout():
    """Crea el layout principal de la aplicacion"""
    return dbc.Container([
        html.Div([
            dbc.Button("Info", id="btn-info-modal", color="link", size="sm"),
        ], className="d-flex justify-content-end pt-2"),
        create_info_modal(),
        dashboard.layout,
    ], fluid=True, className="py-2")


app.layout = create_layout()


@callback(
    Output("modal-info", "is_open"),
    Input("btn-info-modal", "n_clicks"),
    Input("btn-cerrar-info-modal", "n_clicks"),
    State("modal-info", "is_open"),
    prevent_initial_call=True
)
def toggle_info_modal(n_open, n_close, is_open):
    """Abre o cierra el modal de informacion"""
    if ctx.triggered_id == "btn-info-modal":
        return True
    elif ctx.triggered_id == "btn-cerrar-info-modal":
        return False
    return is_open


if __name__ == "__main__":
    if settings.debug:
        logger.info("Modo desarrollo activado")

    logger.info(f"Iniciando Forecast Dashboard en puerto {settings.port}")
    # use_reloader=False evita doble ejecucion de callbacks en modo debug
    app.run(debug=settings.debug, host="0.0.0.0", port=settings.port, use_reloader=False)
