"""
Estrategia de Forecasting con ETS
=================================
Suavizado exponencial (Error-Trend-Seasonality) de statsmodels.

Es el modelo por defecto: se ajusta rapido y da intervalos de prediccion
analiticos para cualquier granularidad.
"""
import warnings
from typing import Optional

import numpy as np
import pandas as pd
from statsmodels.tsa.exponential_smoothing.ets import ETSModel

from forecast_dashboard.ml.strategies.base import ForecastStrategy
from forecast_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


class ETSStrategy(ForecastStrategy):
    """
    ETS con error aditivo y tendencia aditiva amortiguada.

    Args:
        trend: "add" o None
        damped_trend: amortiguar la tendencia (recomendado para horizontes largos)
        seasonal: "add", "mul" o None
        seasonal_periods: largo de la estacionalidad (requerido si seasonal)
    """

    def __init__(self, **kwargs):
        super().__init__()
        self.trend: Optional[str] = kwargs.get('trend', 'add')
        self.damped_trend: bool = kwargs.get('damped_trend', True)
        self.seasonal: Optional[str] = kwargs.get('seasonal', None)
        self.seasonal_periods: Optional[int] = kwargs.get('seasonal_periods', None)
        self._fitted_model = None

    @property
    def nombre_modelo(self) -> str:
        return "ETS"

    def _ajustar_y_predecir(self, valores: np.ndarray, horizonte: int, nivel: float):
        n = len(valores)
        usar_estacionalidad = (
            self.seasonal is not None
            and self.seasonal_periods is not None
            and n >= 2 * self.seasonal_periods
        )

        with warnings.catch_warnings():
            warnings.simplefilter("ignore")

            # get_prediction necesita un endog con indice
            modelo = ETSModel(
                pd.Series(valores),
                error="add",
                trend=self.trend,
                damped_trend=self.damped_trend if self.trend else False,
                seasonal=self.seasonal if usar_estacionalidad else None,
                seasonal_periods=self.seasonal_periods if usar_estacionalidad else None,
            )
            self._fitted_model = modelo.fit(disp=False)

            prediccion = self._fitted_model.get_prediction(start=n, end=n + horizonte - 1)
            frame = prediccion.summary_frame(alpha=1 - nivel)

        logger.debug(f"ETS ajustado: n={n}, aic={self._fitted_model.aic:.2f}")

        return (
            frame['mean'].to_numpy(),
            frame['pi_lower'].to_numpy(),
            frame['pi_upper'].to_numpy(),
            np.asarray(self._fitted_model.fittedvalues),
        )
