"""
Fuentes de datos externas.
"""
from .base import DataSource, normalizar_serie, get_sync_client
from .fred import FREDSource
from .nasdaq import NasdaqDataLinkSource
from .manager import SourceManager

__all__ = [
    'DataSource',
    'normalizar_serie',
    'get_sync_client',
    'FREDSource',
    'NasdaqDataLinkSource',
    'SourceManager',
]
