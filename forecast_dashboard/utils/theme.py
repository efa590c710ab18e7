"""
Tema visual y configuracion de colores para Forecast Dashboard
"""

COLORS = {
    # Fondos
    "bg_primary": "#F7F7F7",
    "bg_dark": "#1F1F21",

    # Series
    "actual": "#1F1F21",            # Historico
    "forecast": "#007AFF",          # Pronostico puntual
    "intervalo": "#5AC8FA",         # Banda de confianza

    # Estados semanticos
    "success": "#4CD964",
    "warning": "#FF9500",
    "danger": "#FF3B30",
    "info": "#5AC8FA",

    # Grises
    "text_primary": "#1F1F21",
    "text_secondary": "#8E8E93",
    "border": "#C7C7CC",
    "grid_color": "rgba(199, 199, 204, 0.3)",
}


def color_con_alpha(color_key: str, alpha: float = 0.2) -> str:
    """
    Convierte un color HEX de COLORS a RGBA con alpha especificado.
    Util para fillcolor de graficos Plotly.

    Args:
        color_key: Clave del color en COLORS dict
        alpha: Valor de opacidad (0.0 - 1.0)

    Returns:
        String RGBA, ej: "rgba(0, 122, 255, 0.2)"
    """
    hex_color = COLORS.get(color_key, '#007AFF').lstrip('#')
    r, g, b = int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)
    return f"rgba({r}, {g}, {b}, {alpha})"


FONT_FAMILY = "Inter, -apple-system, system-ui, sans-serif"

# Template base de Plotly
PLOTLY_TEMPLATE = {
    "layout": {
        "paper_bgcolor": "rgba(0, 0, 0, 0)",
        "plot_bgcolor": "rgba(0, 0, 0, 0)",
        "font": {"color": COLORS["text_primary"], "family": FONT_FAMILY, "size": 13},
        "title": {"font": {"color": COLORS["text_primary"], "size": 17, "family": FONT_FAMILY}},
        "xaxis": {
            "gridcolor": "rgba(60, 60, 67, 0.08)",
            "linecolor": "rgba(60, 60, 67, 0.12)",
            "tickfont": {"color": COLORS["text_secondary"], "size": 11}
        },
        "yaxis": {
            "gridcolor": "rgba(60, 60, 67, 0.08)",
            "linecolor": "rgba(60, 60, 67, 0.12)",
            "tickfont": {"color": COLORS["text_secondary"], "size": 11}
        },
        "legend": {
            "bgcolor": "rgba(255, 255, 255, 0.92)",
            "bordercolor": "rgba(60, 60, 67, 0.12)",
            "borderwidth": 1,
        },
        "hoverlabel": {
            "bgcolor": "rgba(28, 28, 30, 0.95)",
            "font": {"color": "#FFFFFF", "family": FONT_FAMILY, "size": 13}
        },
        "margin": {"l": 48, "r": 16, "t": 56, "b": 48}
    }
}
