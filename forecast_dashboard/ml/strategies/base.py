"""
Base Strategy para Modelos de Forecasting
==========================================
Clase abstracta que define la interfaz de todos los modelos.

El pipeline solo conoce `pronosticar(serie, horizonte, nivel)`; cualquier
modelo que la implemente puede reemplazar al de por defecto.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import (
    mean_absolute_error,
    mean_absolute_percentage_error,
    mean_squared_error,
)

from forecast_dashboard.utils.exceptions import ForecastFailedError, InsufficientDataError
from forecast_dashboard.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)


@dataclass(frozen=True)
class ForecastResult:
    """
    Pronostico puntual con su intervalo.

    Los tres arreglos tienen largo `horizon` y se alinean por posicion con
    las fechas futuras que genera el pipeline.
    """
    point_forecast: np.ndarray
    upper_bound: np.ndarray
    lower_bound: np.ndarray
    nivel: float = 0.95
    modelo: str = ""
    metricas: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        largos = {len(self.point_forecast), len(self.upper_bound), len(self.lower_bound)}
        if len(largos) != 1:
            raise ForecastFailedError(
                f"Pronostico desalineado: largos {sorted(largos)}",
                model_type=self.modelo or None
            )

    @property
    def horizon(self) -> int:
        return len(self.point_forecast)


class ForecastStrategy(ABC):
    """
    Estrategia base abstracta para modelos de forecasting.

    Las subclases implementan `_ajustar_y_predecir`; la validacion de
    entrada y de salida vive aqui.
    """

    # Observaciones minimas para ajustar el modelo
    min_registros: int = 10

    def __init__(self):
        self.metrics: Dict[str, float] = {}
        self.is_trained = False

    @property
    @abstractmethod
    def nombre_modelo(self) -> str:
        """Nombre legible del modelo"""
        pass

    @abstractmethod
    def _ajustar_y_predecir(
        self,
        valores: np.ndarray,
        horizonte: int,
        nivel: float
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray, Optional[np.ndarray]]:
        """
        Ajusta el modelo y predice.

        Args:
            valores: Observaciones historicas en orden cronologico
            horizonte: Numero de periodos a predecir
            nivel: Nivel de confianza del intervalo (0.8, 0.95)

        Returns:
            (prediccion, limite_inferior, limite_superior, valores_ajustados)
            valores_ajustados puede ser None si el modelo no los expone
        """
        pass

    def validar_datos(self, serie: pd.Series, min_registros: int = None) -> bool:
        """Valida que hay suficientes datos para ajustar"""
        minimo = min_registros if min_registros is not None else self.min_registros
        return serie is not None and len(serie.dropna()) >= minimo

    @log_execution_time
    def pronosticar(self, serie: pd.Series, horizonte: int, nivel: float = 0.95) -> ForecastResult:
        """
        Genera el pronostico puntual y el intervalo para `horizonte` periodos.

        Raises:
            InsufficientDataError: menos de `min_registros` observaciones
            ForecastFailedError: el modelo fallo o devolvio valores invalidos
        """
        if horizonte < 1:
            raise ForecastFailedError(f"Horizonte invalido: {horizonte}", model_type=self.nombre_modelo)

        if not self.validar_datos(serie):
            disponibles = 0 if serie is None else len(serie.dropna())
            raise InsufficientDataError(
                f"{self.nombre_modelo} necesita al menos {self.min_registros} observaciones",
                required=self.min_registros,
                available=disponibles,
                model_type=self.nombre_modelo
            )

        valores = serie.dropna().to_numpy(dtype=float)

        try:
            pred, inferior, superior, ajustados = self._ajustar_y_predecir(valores, horizonte, nivel)
        except ForecastFailedError:
            raise
        except Exception as e:
            logger.warning(f"{self.nombre_modelo} fallo al ajustar: {e}")
            raise ForecastFailedError(
                f"{self.nombre_modelo} no pudo ajustarse: {e}",
                model_type=self.nombre_modelo,
                samples=len(valores)
            ) from e

        pred = np.asarray(pred, dtype=float)
        inferior = np.asarray(inferior, dtype=float)
        superior = np.asarray(superior, dtype=float)

        if len(pred) != horizonte:
            raise ForecastFailedError(
                f"{self.nombre_modelo} devolvio {len(pred)} periodos, se esperaban {horizonte}",
                model_type=self.nombre_modelo
            )
        if not (np.isfinite(pred).all() and np.isfinite(inferior).all() and np.isfinite(superior).all()):
            raise ForecastFailedError(
                f"{self.nombre_modelo} devolvio valores no finitos",
                model_type=self.nombre_modelo
            )

        if ajustados is not None:
            self.metrics = self._calcular_metricas(valores, np.asarray(ajustados, dtype=float))
        self.is_trained = True

        return ForecastResult(
            point_forecast=pred,
            upper_bound=np.maximum(superior, pred),
            lower_bound=np.minimum(inferior, pred),
            nivel=nivel,
            modelo=self.nombre_modelo,
            metricas=dict(self.metrics)
        )

    def _calcular_metricas(self, y_true: np.ndarray, y_pred: np.ndarray) -> Dict[str, float]:
        """Metricas de ajuste in-sample (MAE, RMSE, MAPE)"""
        n = min(len(y_true), len(y_pred))
        y_true, y_pred = y_true[-n:], y_pred[-n:]
        mascara = np.isfinite(y_true) & np.isfinite(y_pred)
        if mascara.sum() == 0:
            return {}
        y_true, y_pred = y_true[mascara], y_pred[mascara]
        return {
            'mae': float(mean_absolute_error(y_true, y_pred)),
            'rmse': float(np.sqrt(mean_squared_error(y_true, y_pred))),
            'mape': float(mean_absolute_percentage_error(y_true, y_pred) * 100),
        }
