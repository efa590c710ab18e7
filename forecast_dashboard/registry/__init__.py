"""
Registros de etiquetas: series, granularidades y unidades de calendario.
"""
from .labels import LabelEntry, LabelRegistry
from .periods import PeriodVocabulary
from .catalog import Catalog, construir_catalogo, obtener_catalogo

__all__ = [
    'LabelEntry',
    'LabelRegistry',
    'PeriodVocabulary',
    'Catalog',
    'construir_catalogo',
    'obtener_catalogo',
]
