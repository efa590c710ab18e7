"""
Gestor de fuentes: elige la fuente que atiende cada identificador.

El orden importa: FRED atiende "FRED/..." y Nasdaq Data Link cualquier
"BASE/CODIGO" restante.
"""
from datetime import date
from typing import List, Optional

import pandas as pd

from forecast_dashboard.config import Settings, get_settings
from forecast_dashboard.data.sources.base import DataSource
from forecast_dashboard.data.sources.fred import FREDSource
from forecast_dashboard.data.sources.nasdaq import NasdaqDataLinkSource
from forecast_dashboard.registry.periods import PeriodVocabulary
from forecast_dashboard.utils.exceptions import FetchFailedError
from forecast_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


class SourceManager:
    """Enruta cada identificador de serie a la primera fuente que lo soporta."""

    def __init__(self, sources: List[DataSource]):
        self.sources = list(sources)

    @classmethod
    def desde_settings(cls, periods: PeriodVocabulary,
                       settings: Optional[Settings] = None) -> "SourceManager":
        settings = settings or get_settings()
        return cls([
            FREDSource(
                periods,
                api_key=settings.fred_api_key,
                base_url=settings.fred_base_url,
                timeout=settings.http_timeout
            ),
            NasdaqDataLinkSource(
                periods,
                api_key=settings.nasdaq_api_key,
                base_url=settings.nasdaq_base_url,
                timeout=settings.http_timeout
            ),
        ])

    def fuente_para(self, source_id: str) -> DataSource:
        for source in self.sources:
            if source.supports(source_id):
                return source
        raise FetchFailedError(f"Ninguna fuente soporta '{source_id}'", source_id=source_id)

    def fetch(self, source_id: str, inicio: date, fin: date, period_id: str) -> pd.Series:
        """Descarga la serie con la fuente correspondiente."""
        source = self.fuente_para(source_id)
        logger.debug(f"Descargando {source_id} desde {source.name}")
        return source.fetch(source_id, inicio, fin, period_id)
