"""
Graficos del tablero
====================

Ambos graficos se construyen a partir del mismo PipelineState confirmado.
"""
from typing import List, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go

from forecast_dashboard.utils.constants import (
    COLUMNA_INFERIOR,
    COLUMNA_PRONOSTICO,
    COLUMNA_REAL,
    COLUMNA_SUPERIOR,
)
from forecast_dashboard.utils.formatters import formato_fecha, formato_porcentaje
from forecast_dashboard.utils.plotly_helpers import crear_figura_warning, layout_base
from forecast_dashboard.utils.theme import COLORS, color_con_alpha

MENSAJE_NO_DISPONIBLE = "Datos no disponibles para esta seleccion"


def _leyenda_horizontal() -> dict:
    return dict(
        orientation="h", yanchor="bottom", y=1.02, xanchor="center", x=0.5,
        bgcolor="rgba(0,0,0,0)", font={"color": COLORS['text_secondary']}
    )


def crear_figura_historica(fetched: pd.Series, label: str) -> go.Figure:
    """Serie historica descargada, titulada con la etiqueta visible."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=fetched.index,
        y=fetched.values,
        name=COLUMNA_REAL,
        line=dict(color=COLORS["actual"], width=1.5),
        mode="lines",
        hovertemplate='<b>%{x|%Y-%m-%d}</b><br>Valor: %{y:,.2f}<extra></extra>'
    ))

    fig.update_layout(
        **layout_base("legend", "margin", "title"),
        title=dict(text=label, x=0.5),
        xaxis_title="Fecha",
        yaxis_title="Valor",
        showlegend=False,
        margin=dict(l=60, r=20, t=50, b=50),
        hovermode="x unified"
    )
    return fig


def crear_figura_forecast(
    merged: pd.DataFrame,
    label: str,
    window: Optional[Tuple[pd.Timestamp, pd.Timestamp]] = None,
    level: float = 0.95
) -> go.Figure:
    """
    Historia + pronostico puntual + banda de confianza.

    Si hay `window`, el eje X arranca enfocado en ella; el rangeslider
    permite recorrer la serie completa.
    """
    historico = merged[COLUMNA_REAL].dropna()
    futuro = merged.dropna(subset=[COLUMNA_PRONOSTICO])

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=historico.index,
        y=historico.values,
        name="Historico",
        line=dict(color=COLORS["actual"], width=1.5),
        mode="lines"
    ))

    # Banda: superior ida, inferior vuelta
    fig.add_trace(go.Scatter(
        x=list(futuro.index) + list(futuro.index[::-1]),
        y=list(futuro[COLUMNA_SUPERIOR]) + list(futuro[COLUMNA_INFERIOR][::-1]),
        fill="toself",
        fillcolor=color_con_alpha('intervalo', 0.25),
        line=dict(color="rgba(255,255,255,0)"),
        name=f"Intervalo {formato_porcentaje(level, 0)}",
        hoverinfo='skip'
    ))

    fig.add_trace(go.Scatter(
        x=futuro.index,
        y=futuro[COLUMNA_PRONOSTICO],
        name="Pronostico",
        line=dict(color=COLORS["forecast"], width=3),
        mode="lines+markers",
        marker=dict(size=5)
    ))

    xaxis = dict(rangeslider=dict(visible=True), type="date")
    if window is not None:
        xaxis["range"] = [formato_fecha(window[0]), formato_fecha(window[1])]

    fig.update_layout(
        **layout_base("legend", "margin", "title", "xaxis"),
        title=dict(text=f"{label}: pronostico", x=0.5),
        xaxis=xaxis,
        yaxis_title="Valor",
        legend=_leyenda_horizontal(),
        margin=dict(l=60, r=20, t=60, b=40),
        hovermode="x unified"
    )
    return fig


def crear_figura_no_disponible(mensaje: str = MENSAJE_NO_DISPONIBLE) -> go.Figure:
    """Placeholder cuando la celda del grafico no esta disponible."""
    return crear_figura_warning(mensaje)


def tabla_forecast(merged: pd.DataFrame) -> List[dict]:
    """Filas para AG Grid con las fechas futuras y su intervalo."""
    futuro = merged.dropna(subset=[COLUMNA_PRONOSTICO])
    return [
        {
            "fecha": formato_fecha(fecha),
            "pronostico": round(float(fila[COLUMNA_PRONOSTICO]), 4),
            "inferior": round(float(fila[COLUMNA_INFERIOR]), 4),
            "superior": round(float(fila[COLUMNA_SUPERIOR]), 4),
        }
        for fecha, fila in futuro.iterrows()
    ]
