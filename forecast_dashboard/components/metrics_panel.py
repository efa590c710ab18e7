"""
Panel de Metricas del modelo
============================

Muestra el ajuste in-sample (MAE, RMSE, MAPE) del modelo que produjo el
pronostico visible, con una interpretacion corta para cada metrica.
"""
from typing import Dict, Optional

import dash_bootstrap_components as dbc
from dash import html


def crear_metrica_card(
    nombre: str,
    valor: float,
    formato: str = ".2f",
    interpretacion: str = "",
    color: str = "primary",
    porcentaje_barra: Optional[float] = None
) -> dbc.Card:
    """
    Crea una tarjeta de metrica individual.

    Args:
        nombre: Nombre de la metrica
        valor: Valor numerico
        formato: Formato para mostrar (ej: ".2f")
        interpretacion: Texto explicativo
        color: Color Bootstrap (primary, success, warning, danger, info)
        porcentaje_barra: Porcentaje para la barra (0-100); sin barra si es None
    """
    barra = None
    if porcentaje_barra is not None:
        barra = dbc.Progress(
            value=min(100, max(0, porcentaje_barra)),
            color=color,
            style={"height": "4px"},
            className="mt-2"
        )

    return dbc.Card([
        dbc.CardBody([
            html.Span(nombre, className="text-muted small"),
            html.H5(f"{valor:{formato}}", className=f"mb-0 text-{color} fw-bold"),
            html.Small(interpretacion, className="text-muted") if interpretacion else None,
            barra
        ], className="p-2")
    ], className="h-100 shadow-sm")


def interpretar_mae(mae: float, media: Optional[float] = None) -> str:
    """Interpreta el MAE relativo a la media de la serie"""
    if media is None or media == 0:
        return "Error medio absoluto"

    pct_error = abs(mae / media) * 100
    if pct_error < 5:
        return f"Excelente ({pct_error:.0f}% de media)"
    elif pct_error < 10:
        return f"Muy bueno ({pct_error:.0f}% de media)"
    elif pct_error < 20:
        return f"Aceptable ({pct_error:.0f}% de media)"
    else:
        return f"Alto ({pct_error:.0f}% de media)"


def interpretar_mape(mape: float) -> str:
    """Interpreta el valor de MAPE"""
    if mape < 10:
        return "Excelente (<10%)"
    elif mape < 20:
        return "Muy bueno (10-20%)"
    elif mape < 30:
        return "Aceptable (20-30%)"
    elif mape < 50:
        return "Mejorable (30-50%)"
    else:
        return "Considere otro modelo"


def crear_panel_metricas(
    metricas: Dict[str, float],
    modelo: str = "",
    media_historica: Optional[float] = None
) -> html.Div:
    """
    Panel con las metricas de ajuste del modelo.

    Args:
        metricas: Diccionario con 'mae', 'rmse' y 'mape'
        modelo: Nombre del modelo, para el encabezado
        media_historica: Media de la serie para contextualizar el MAE

    Returns:
        html.Div con el panel; un texto neutro si el modelo no expone metricas
    """
    if not metricas:
        return html.Div(
            f"{modelo or 'El modelo'} no expone metricas de ajuste",
            className="text-muted small"
        )

    mae = metricas.get('mae', 0.0)
    rmse = metricas.get('rmse', 0.0)
    mape = metricas.get('mape', 0.0)

    color_mae = 'success' if media_historica and abs(mae) < abs(media_historica) * 0.1 else 'info'
    color_mape = 'success' if mape < 15 else ('warning' if mape < 30 else 'danger')

    cards = [
        dbc.Col(crear_metrica_card(
            "MAE (Error Medio)", mae,
            interpretacion=interpretar_mae(mae, media_historica),
            color=color_mae
        ), md=4),
        dbc.Col(crear_metrica_card(
            "RMSE", rmse,
            interpretacion="Penaliza errores grandes",
            color="info"
        ), md=4),
        dbc.Col(crear_metrica_card(
            "MAPE", mape,
            formato=".1f",
            interpretacion=interpretar_mape(mape),
            color=color_mape,
            porcentaje_barra=100 - min(mape, 100)
        ), md=4),
    ]

    return html.Div([
        html.H6(f"Ajuste in-sample: {modelo}" if modelo else "Ajuste in-sample", className="text-muted mb-2"),
        dbc.Row(cards, className="g-2")
    ])
