"""
Catalogo de arranque: series disponibles y granularidades.

Se construye una sola vez; una tabla rota falla al iniciar la aplicacion
con RegistryIntegrityError en lugar de fallar en medio de una sesion.
"""
from dataclasses import dataclass
from functools import lru_cache

from forecast_dashboard.registry.labels import LabelRegistry
from forecast_dashboard.registry.periods import PeriodVocabulary
from forecast_dashboard.utils.constants import PERIOD_LABELS, PERIOD_STEPS, SERIES_CATALOG
from forecast_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Catalog:
    """Registros inmutables compartidos por todas las sesiones"""
    series: LabelRegistry
    periods: PeriodVocabulary


def construir_catalogo(series=None, period_labels=None, period_steps=None) -> Catalog:
    """
    Construye y valida el catalogo.

    Raises:
        RegistryIntegrityError: si alguna tabla no es una biyeccion
    """
    catalogo = Catalog(
        series=LabelRegistry.from_mapping(series if series is not None else SERIES_CATALOG, name="series"),
        periods=PeriodVocabulary.from_mappings(
            period_labels if period_labels is not None else PERIOD_LABELS,
            period_steps if period_steps is not None else PERIOD_STEPS,
        ),
    )
    logger.info(
        f"Catalogo cargado: {len(catalogo.series)} series, "
        f"{len(catalogo.periods.labels)} granularidades"
    )
    return catalogo


@lru_cache(maxsize=1)
def obtener_catalogo() -> Catalog:
    """Catalogo por defecto (singleton del proceso)."""
    return construir_catalogo()
