"""
Constantes centralizadas del proyecto Forecast Dashboard
=========================================================
Tablas de etiquetas, limites de entrada y valores por defecto.
"""
from datetime import date

# ============================================================================
# Catalogo de series (etiqueta visible -> identificador de la API de datos)
# ============================================================================

SERIES_CATALOG = {
    "WTI oil": "FRED/DCOILWTICO",
    "Brent oil": "FRED/DCOILBRENTEU",
    "Henry Hub gas": "FRED/DHHNGSP",
    "US CPI": "FRED/CPIAUCSL",
    "Gold (London PM)": "LBMA/GOLD",
}

SERIE_DEFAULT = "FRED/DCOILWTICO"


# ============================================================================
# Granularidades
# ============================================================================

# Etiqueta visible -> identificador que entiende la API (parametro collapse)
PERIOD_LABELS = {
    "Days": "daily",
    "Weeks": "weekly",
    "Months": "monthly",
    "Quarters": "quarterly",
    "Years": "annual",
}

# Identificador de la API -> unidad de calendario (plural) para avanzar fechas
PERIOD_STEPS = {
    "daily": "days",
    "weekly": "weeks",
    "monthly": "months",
    "quarterly": "quarters",
    "annual": "years",
}

PERIODO_DEFAULT = "monthly"


# ============================================================================
# Horizonte de prediccion
# ============================================================================

HORIZONTE_MIN = 1
HORIZONTE_MAX = 100
HORIZONTE_DEFAULT = 6


# ============================================================================
# Rango de fechas por defecto
# ============================================================================

FECHA_INICIO_DEFAULT = date(1980, 1, 1)
FECHA_FIN_DEFAULT = date(2016, 12, 31)


# ============================================================================
# Niveles de confianza para intervalos de prediccion
# ============================================================================

NIVELES_CONFIANZA = [
    {"label": "80%", "value": 0.80},
    {"label": "95%", "value": 0.95},
]

CONFIANZA_DEFAULT = 0.95


# ============================================================================
# Modelos de pronostico disponibles
# ============================================================================

MODELOS_ML = {
    'ets': {
        'nombre': 'ETS (Suavizado exponencial)',
        'tooltip': 'Error-Trend-Seasonality. Modelo por defecto, robusto para series con tendencia suave.'
    },
    'arima': {
        'nombre': 'ARIMA',
        'tooltip': 'Modelo estadistico clasico. Captura autocorrelaciones y tendencias.'
    },
    'theta': {
        'nombre': 'Theta',
        'tooltip': 'Metodo Theta. Rapido y competitivo para series mensuales y trimestrales.'
    },
}

MODELO_DEFAULT = 'ets'


# ============================================================================
# Presentacion
# ============================================================================

# Meses de historia visibles por defecto en el grafico de forecast
MESES_VENTANA_VISIBLE = 6

# Columnas de la serie combinada
COLUMNA_REAL = "Actual"
COLUMNA_PRONOSTICO = "Forecast"
COLUMNA_SUPERIOR = "Upper"
COLUMNA_INFERIOR = "Lower"

COLUMNAS_COMBINADAS = [COLUMNA_REAL, COLUMNA_PRONOSTICO, COLUMNA_SUPERIOR, COLUMNA_INFERIOR]

# Sesiones vivas por proceso
MAX_SESIONES = 256

# Entradas memorizadas por celda del pipeline
MAX_CACHE_CELDA = 16
