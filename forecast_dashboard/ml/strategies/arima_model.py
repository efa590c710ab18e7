"""
Estrategia de Forecasting con ARIMA
===================================
ARIMA via statsmodels SARIMAX.

ARIMA es ideal para:
- Series con autocorrelacion marcada
- Baseline estadistico para comparar contra ETS
"""
import warnings
from itertools import product
from typing import Optional, Tuple

import numpy as np
from statsmodels.tsa.statespace.sarimax import SARIMAX

from forecast_dashboard.ml.strategies.base import ForecastStrategy
from forecast_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

# Por encima de este largo no se busca el orden (cada ajuste es caro)
MAX_OBS_SELECCION = 2000


class ARIMAStrategy(ForecastStrategy):
    """
    Estrategia de forecasting usando ARIMA(p, d, q).

    Si no se fija `order`, elige p y q en {0, 1, 2} con d=1 por AIC.
    """

    def __init__(self, **kwargs):
        super().__init__()
        self.order: Optional[Tuple[int, int, int]] = kwargs.get('order', None)
        self.auto_select: bool = kwargs.get('auto_select', True)
        self._fitted_model = None

    @property
    def nombre_modelo(self) -> str:
        return "ARIMA"

    def _ajustar(self, valores: np.ndarray, order: Tuple[int, int, int]):
        modelo = SARIMAX(
            valores,
            order=order,
            trend='t' if order[1] == 1 else 'c',
            enforce_stationarity=False,
            enforce_invertibility=False
        )
        return modelo.fit(disp=False)

    def _seleccionar_orden(self, valores: np.ndarray) -> Tuple[int, int, int]:
        """Busqueda pequena de (p, 1, q) por AIC."""
        if not self.auto_select or len(valores) > MAX_OBS_SELECCION or len(valores) < 20:
            return (1, 1, 1)

        mejor_orden, mejor_aic = (1, 1, 1), np.inf
        for p, q in product(range(3), range(3)):
            try:
                aic = self._ajustar(valores, (p, 1, q)).aic
            except (ValueError, np.linalg.LinAlgError) as e:
                logger.debug(f"ARIMA({p},1,{q}) descartado: {e}")
                continue
            if np.isfinite(aic) and aic < mejor_aic:
                mejor_orden, mejor_aic = (p, 1, q), aic
        return mejor_orden

    def _ajustar_y_predecir(self, valores: np.ndarray, horizonte: int, nivel: float):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")

            order = self.order or self._seleccionar_orden(valores)
            self._fitted_model = self._ajustar(valores, order)
            self.order = order

            forecast = self._fitted_model.get_forecast(steps=horizonte)
            conf_int = np.asarray(forecast.conf_int(alpha=1 - nivel))

        logger.info(f"ARIMA{order} ajustado sobre {len(valores)} observaciones")

        # El primer valor ajustado con d=1 no es informativo
        ajustados = np.asarray(self._fitted_model.fittedvalues)
        ajustados[0] = np.nan

        return (
            np.asarray(forecast.predicted_mean),
            conf_int[:, 0],
            conf_int[:, 1],
            ajustados,
        )
