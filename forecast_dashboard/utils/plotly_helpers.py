"""
Helpers para graficos Plotly
============================
Figuras de estado (vacio, error, advertencia) con el mismo estilo.
"""
import plotly.graph_objects as go
from forecast_dashboard.utils.theme import PLOTLY_TEMPLATE, COLORS


def layout_base(*excluir: str) -> dict:
    """Copia del layout del template sin las claves indicadas."""
    return {k: v for k, v in PLOTLY_TEMPLATE["layout"].items() if k not in excluir}


def crear_figura_vacia(mensaje: str = "Sin datos", color_texto: str = None) -> go.Figure:
    """
    Crea una figura Plotly vacia con un mensaje centrado.

    Args:
        mensaje: Texto a mostrar en el centro del grafico
        color_texto: Color del texto (default: text_secondary del theme)

    Returns:
        go.Figure con el mensaje centrado
    """
    if color_texto is None:
        color_texto = COLORS.get('text_secondary', '#8e8e93')

    fig = go.Figure()
    fig.update_layout(
        **layout_base("margin", "xaxis", "yaxis"),
        xaxis={"visible": False},
        yaxis={"visible": False},
        annotations=[{
            "text": mensaje,
            "showarrow": False,
            "font": {"size": 13, "color": color_texto},
            "xref": "paper",
            "yref": "paper",
            "x": 0.5,
            "y": 0.5
        }],
        margin=dict(l=20, r=20, t=20, b=20)
    )
    return fig


def crear_figura_error(mensaje: str = "Error al cargar datos") -> go.Figure:
    """Figura vacia con el mensaje en color de error."""
    return crear_figura_vacia(mensaje, color_texto=COLORS.get('danger', '#ff3b30'))


def crear_figura_warning(mensaje: str = "Advertencia") -> go.Figure:
    """Figura vacia con el mensaje en color de advertencia."""
    return crear_figura_vacia(mensaje, color_texto=COLORS.get('warning', '#ff9500'))
