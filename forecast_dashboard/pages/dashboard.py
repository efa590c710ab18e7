"""
Tablero de Pronostico de Series
===============================
Seleccion de serie, granularidad, rango y horizonte; grafico historico y
grafico de pronostico con intervalo de confianza.
"""
import dash_ag_grid as dag
import dash_bootstrap_components as dbc
from dash import dcc, html

from forecast_dashboard.config import get_settings
from forecast_dashboard.ml.strategies import obtener_opciones_modelos
from forecast_dashboard.registry.catalog import obtener_catalogo
from forecast_dashboard.utils.constants import (
    CONFIANZA_DEFAULT,
    FECHA_FIN_DEFAULT,
    FECHA_INICIO_DEFAULT,
    HORIZONTE_DEFAULT,
    HORIZONTE_MAX,
    HORIZONTE_MIN,
    NIVELES_CONFIANZA,
    PERIODO_DEFAULT,
    SERIE_DEFAULT,
)


def crear_controles() -> html.Div:
    """Controles de seleccion en una sola fila"""
    catalogo = obtener_catalogo()

    return html.Div([
        dbc.Row([
            dbc.Col([
                html.Label("Serie", className="filter-label"),
                dcc.Dropdown(
                    id="select-serie",
                    options=catalogo.series.as_options(),
                    value=SERIE_DEFAULT,
                    clearable=False
                )
            ], md=3),
            dbc.Col([
                html.Label("Granularidad", className="filter-label"),
                dcc.Dropdown(
                    id="select-periodo",
                    options=catalogo.periods.as_options(),
                    value=PERIODO_DEFAULT,
                    clearable=False
                )
            ], md=2),
            dbc.Col([
                html.Label("Rango de fechas", className="filter-label"),
                dcc.DatePickerRange(
                    id="rango-fechas",
                    start_date=FECHA_INICIO_DEFAULT,
                    end_date=FECHA_FIN_DEFAULT,
                    display_format="YYYY-MM-DD"
                )
            ], md=3),
            dbc.Col([
                html.Label("Horizonte", className="filter-label"),
                dcc.Input(
                    id="input-horizonte",
                    type="number",
                    min=HORIZONTE_MIN,
                    max=HORIZONTE_MAX,
                    step=1,
                    value=HORIZONTE_DEFAULT,
                    debounce=True,
                    className="form-control"
                )
            ], md=1),
            dbc.Col([
                html.Label("Modelo", className="filter-label"),
                dcc.Dropdown(
                    id="select-modelo",
                    options=obtener_opciones_modelos(),
                    value=get_settings().default_model,
                    clearable=False
                )
            ], md=2),
            dbc.Col([
                html.Label("Confianza", className="filter-label"),
                dcc.Dropdown(
                    id="select-confianza",
                    options=NIVELES_CONFIANZA,
                    value=CONFIANZA_DEFAULT,
                    clearable=False
                )
            ], md=1),
        ], className="g-2 align-items-end"),
    ], className="filters-container mb-3")


def crear_graficos() -> html.Div:
    """Grafico historico arriba, grafico de pronostico abajo"""
    config_grafico = {
        "displayModeBar": True,
        "modeBarButtonsToRemove": ["lasso2d", "select2d"],
        "displaylogo": False
    }
    return html.Div([
        html.Div(id="alerta-dashboard", className="mb-2"),
        dcc.Loading(
            type="default",
            children=[
                dcc.Graph(id="grafico-historico", config=config_grafico, style={"height": "360px"}),
                dcc.Graph(id="grafico-forecast", config=config_grafico, style={"height": "440px"}),
            ]
        ),
        html.Div(id="panel-metricas", className="mt-3"),
    ], className="chart-container mb-4")


def crear_tabla_pronostico() -> html.Div:
    """Tabla de valores pronosticados con exportacion a CSV"""
    column_defs = [
        {"field": "fecha", "headerName": "Fecha", "width": 130, "pinned": "left"},
        {"field": "pronostico", "headerName": "Pronostico", "width": 140,
         "type": "numericColumn", "valueFormatter": {"function": "d3.format(',.2f')(params.value)"}},
        {"field": "inferior", "headerName": "Limite inferior", "width": 140,
         "type": "numericColumn", "valueFormatter": {"function": "d3.format(',.2f')(params.value)"}},
        {"field": "superior", "headerName": "Limite superior", "width": 140,
         "type": "numericColumn", "valueFormatter": {"function": "d3.format(',.2f')(params.value)"}},
    ]
    return html.Div([
        html.Div([
            html.H6("Valores pronosticados", className="mb-0"),
            dbc.Button("Exportar CSV", id="btn-exportar-csv", color="success", outline=True, size="sm"),
        ], className="d-flex justify-content-between align-items-center mb-2"),
        dag.AgGrid(
            id="tabla-pronostico",
            columnDefs=column_defs,
            rowData=[],
            defaultColDef={"sortable": True, "resizable": True},
            dashGridOptions={"pagination": True, "paginationPageSize": 20},
            style={"height": "320px", "width": "100%"}
        ),
        dcc.Download(id="download-csv"),
    ], className="table-container")


layout = html.Div([
    dcc.Store(id="store-session-id", storage_type="session"),

    html.H4("PRONOSTICO DE SERIES", className="mb-3 text-center",
            style={"fontWeight": "700", "letterSpacing": "1px"}),

    crear_controles(),
    crear_graficos(),
    crear_tabla_pronostico(),
], className="fade-in")
