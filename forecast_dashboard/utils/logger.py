"""
Sistema de Logging Estructurado para Forecast Dashboard
Logging con consola y rotacion de archivos para los modulos de la libreria.
"""
import functools
import logging
import os
import sys
import time
from pathlib import Path
from logging.handlers import RotatingFileHandler

# Directorio de logs (relativo a la raiz del proyecto, sobreescribible por entorno)
LOG_DIR = Path(os.getenv("FORECAST_LOG_DIR", Path(__file__).parent.parent.parent / "logs"))

# Formato de log
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _crear_file_handlers(formatter: logging.Formatter) -> list:
    """Handlers de archivo con rotacion; vacio si el directorio no es escribible."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return []

    file_handler = RotatingFileHandler(
        LOG_DIR / "forecast_dashboard.log",
        maxBytes=10_000_000,  # 10 MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    # Handler separado para errores
    error_handler = RotatingFileHandler(
        LOG_DIR / "forecast_dashboard_errors.log",
        maxBytes=5_000_000,  # 5 MB
        backupCount=3,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)

    return [file_handler, error_handler]


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Obtiene un logger configurado con handlers de consola y archivo.

    Args:
        name: Nombre del logger (usar __name__ del modulo)
        level: Nivel minimo para la consola (default: INFO)

    Returns:
        Logger configurado

    Example:
        >>> from forecast_dashboard.utils.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Serie descargada")
    """
    logger = logging.getLogger(name)

    # Evitar configuracion duplicada si ya tiene handlers
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)  # Captura todo, los handlers filtran

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    for handler in _crear_file_handlers(formatter):
        logger.addHandler(handler)

    return logger


class LoggerMixin:
    """
    Mixin para agregar logging a clases.

    Example:
        >>> class MiFuente(LoggerMixin):
        ...     def descargar(self):
        ...         self.logger.info("Descargando")
    """

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        return self._logger


def log_execution_time(func):
    """
    Decorador para loggear tiempo de ejecucion de funciones.

    Example:
        >>> @log_execution_time
        ... def ajustar_modelo():
        ...     time.sleep(1)
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__name__} ejecutado en {elapsed:.3f}s")
            return result
        except Exception as e:
            elapsed = time.perf_counter() - start
            logger.error(f"{func.__name__} fallo despues de {elapsed:.3f}s: {e}")
            raise

    return wrapper
