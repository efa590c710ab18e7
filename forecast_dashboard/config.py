"""
Configuracion centralizada de Forecast Dashboard
================================================
Variables de entorno (y archivo .env) en un solo lugar.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from forecast_dashboard.utils.constants import MODELO_DEFAULT

# Cargar variables de entorno (sin pisar las ya definidas)
load_dotenv()


@dataclass
class Settings:
    """Configuracion de la aplicacion cargada desde el entorno."""

    # Claves de API
    nasdaq_api_key: Optional[str] = None
    fred_api_key: Optional[str] = None

    # URLs base
    nasdaq_base_url: str = "https://data.nasdaq.com/api/v3"
    fred_base_url: str = "https://api.stlouisfed.org/fred"

    # HTTP
    http_timeout: float = 15.0

    # Servidor
    port: int = 8050
    debug: bool = False
    log_level: str = "INFO"

    # Modelo por defecto en la UI
    default_model: str = MODELO_DEFAULT

    @classmethod
    def from_env(cls) -> "Settings":
        """Carga la configuracion desde variables de entorno."""
        return cls(
            nasdaq_api_key=os.getenv('NASDAQ_DATA_LINK_API_KEY') or os.getenv('QUANDL_API_KEY'),
            fred_api_key=os.getenv('FRED_API_KEY'),
            nasdaq_base_url=os.getenv('NASDAQ_BASE_URL', cls.nasdaq_base_url),
            fred_base_url=os.getenv('FRED_BASE_URL', cls.fred_base_url),
            http_timeout=float(os.getenv('HTTP_TIMEOUT', 15.0)),
            port=int(os.getenv('PORT', 8050)),
            debug=os.getenv('FLASK_ENV', 'production') == 'development',
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            default_model=os.getenv('DEFAULT_MODEL', MODELO_DEFAULT),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Obtiene la instancia singleton de Settings."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
