"""
Forecast Dashboard
==================
Tablero Dash para descargar series economicas, pronosticarlas y
comparar el pronostico con la historia.
"""

__version__ = "1.0.0"
