"""
Estrategias de Forecasting
==========================
Módulo que implementa el patrón Strategy para modelos de forecasting.

El pipeline recibe una fábrica de estrategias, de modo que un modelo
nuevo se agrega registrándolo aquí sin modificar el pipeline.
"""
from typing import Dict, List, Type

from forecast_dashboard.ml.strategies.base import ForecastResult, ForecastStrategy
from forecast_dashboard.ml.strategies.ets_model import ETSStrategy
from forecast_dashboard.ml.strategies.arima_model import ARIMAStrategy
from forecast_dashboard.ml.strategies.theta_model import ThetaStrategy
from forecast_dashboard.utils.constants import MODELOS_ML
from forecast_dashboard.utils.exceptions import ConfigurationError
from forecast_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

# Registro de estrategias disponibles
_STRATEGIES: Dict[str, Type[ForecastStrategy]] = {}


def registrar_estrategia(nombre: str, clase: Type[ForecastStrategy]):
    """
    Registra una estrategia de forecasting.

    Args:
        nombre: Identificador único del modelo
        clase: Clase que implementa ForecastStrategy
    """
    _STRATEGIES[nombre] = clase
    logger.debug(f"Estrategia registrada: {nombre}")


def obtener_estrategia(nombre: str, **kwargs) -> ForecastStrategy:
    """
    Factory para obtener una estrategia de forecasting.

    Args:
        nombre: Nombre del modelo (ets, arima, theta)
        **kwargs: Parámetros del modelo

    Raises:
        ConfigurationError: si el modelo no está registrado
    """
    if nombre not in _STRATEGIES:
        raise ConfigurationError(
            f"Estrategia '{nombre}' no encontrada",
            {'disponibles': sorted(_STRATEGIES)}
        )
    return _STRATEGIES[nombre](**kwargs)


def listar_estrategias() -> List[str]:
    """Nombres de las estrategias registradas, en orden de registro."""
    return list(_STRATEGIES)


def obtener_opciones_modelos() -> List[dict]:
    """
    Genera opciones para el dropdown de modelos con tooltips.

    Returns:
        Lista de dicts con label, value y title para dcc.Dropdown
    """
    return [
        {
            "label": MODELOS_ML.get(nombre, {}).get('nombre', nombre),
            "value": nombre,
            "title": MODELOS_ML.get(nombre, {}).get('tooltip', ''),
        }
        for nombre in _STRATEGIES
    ]


# =============================================================================
# Registro de Estrategias
# =============================================================================

registrar_estrategia('ets', ETSStrategy)
registrar_estrategia('arima', ARIMAStrategy)
registrar_estrategia('theta', ThetaStrategy)


__all__ = [
    'ForecastResult',
    'ForecastStrategy',
    'obtener_estrategia',
    'listar_estrategias',
    'obtener_opciones_modelos',
    'registrar_estrategia',
    'ETSStrategy',
    'ARIMAStrategy',
    'ThetaStrategy',
]
