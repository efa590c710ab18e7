# Data module exports
from .sources import SourceManager, DataSource, FREDSource, NasdaqDataLinkSource

__all__ = ['SourceManager', 'DataSource', 'FREDSource', 'NasdaqDataLinkSource']
