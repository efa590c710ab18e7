"""
Estrategia de Forecasting con el metodo Theta (statsmodels ThetaModel).
"""
import warnings
from typing import Optional

import numpy as np
from statsmodels.tsa.forecasting.theta import ThetaModel

from forecast_dashboard.ml.strategies.base import ForecastStrategy


class ThetaStrategy(ForecastStrategy):
    """Theta con desestacionalizacion opcional (requiere `period`)."""

    def __init__(self, **kwargs):
        super().__init__()
        self.period: Optional[int] = kwargs.get('period', None)
        self._fitted_model = None

    @property
    def nombre_modelo(self) -> str:
        return "Theta"

    def _ajustar_y_predecir(self, valores: np.ndarray, horizonte: int, nivel: float):
        desestacionalizar = self.period is not None and len(valores) >= 2 * self.period

        with warnings.catch_warnings():
            warnings.simplefilter("ignore")

            modelo = ThetaModel(
                valores,
                period=self.period if desestacionalizar else None,
                deseasonalize=desestacionalizar
            )
            self._fitted_model = modelo.fit()
            prediccion = np.asarray(self._fitted_model.forecast(horizonte))
            intervalo = np.asarray(self._fitted_model.prediction_intervals(horizonte, alpha=1 - nivel))

        # ThetaModel no expone valores ajustados
        return prediccion, intervalo[:, 0], intervalo[:, 1], None
