"""
Vocabulario de Periodos
=======================
Adapta LabelRegistry al dominio de granularidad de calendario.

Hay dos vocabularios cerrados sobre las mismas granularidades:
- el que entiende la API de datos ("monthly"), usado para descargar
- el de unidades de calendario en plural ("months"), usado para avanzar fechas

PeriodVocabulary valida al construirse que ambos cubren exactamente las
mismas granularidades, de modo que un periodo ofrecido en la UI siempre
tiene una unidad de calendario con la que generar fechas futuras.
"""
from datetime import date, datetime
from typing import Dict, Union

import pandas as pd
from dateutil.relativedelta import relativedelta

from forecast_dashboard.registry.labels import LabelRegistry
from forecast_dashboard.utils.exceptions import (
    RegistryIntegrityError,
    UnknownIdentifierError,
    UnknownLabelError,
)

FechaLike = Union[date, datetime, pd.Timestamp, str]

# Unidad de calendario -> (argumento de relativedelta, multiplicador)
UNIDADES_SOPORTADAS = {
    "days": ("days", 1),
    "weeks": ("weeks", 1),
    "months": ("months", 1),
    "quarters": ("months", 3),
    "years": ("years", 1),
}

# Unidades cuyo avance conserva el fin de mes
_UNIDADES_MENSUALES = {"months", "quarters", "years"}

# Offsets de fin de periodo para colapsar observaciones
_OFFSETS_PANDAS = {
    "days": pd.offsets.Day,
    "weeks": lambda: pd.offsets.Week(weekday=6),
    "months": pd.offsets.MonthEnd,
    "quarters": pd.offsets.QuarterEnd,
    "years": pd.offsets.YearEnd,
}


class PeriodVocabulary:
    """
    Granularidades disponibles: etiqueta visible -> id de la API -> unidad de calendario.

    Args:
        labels: registro etiqueta visible -> id de la API ("Months" -> "monthly")
        steps: registro id de la API -> unidad de calendario ("monthly" -> "months")
    """

    def __init__(self, labels: LabelRegistry, steps: LabelRegistry):
        self.labels = labels
        self.steps = steps

        ids_ui = set(labels.ids())
        ids_pasos = set(steps.labels())
        if ids_ui != ids_pasos:
            faltantes = sorted(ids_ui.symmetric_difference(ids_pasos))
            raise RegistryIntegrityError(
                f"Periodos sin correspondencia entre UI y unidades de calendario: {faltantes}",
                registry=steps.name,
                duplicates=faltantes
            )

        no_soportadas = sorted(set(steps.ids()) - set(UNIDADES_SOPORTADAS))
        if no_soportadas:
            raise RegistryIntegrityError(
                f"Unidades de calendario no soportadas: {no_soportadas}",
                registry=steps.name,
                duplicates=no_soportadas
            )

    @classmethod
    def from_mappings(
        cls,
        labels: Dict[str, str],
        steps: Dict[str, str]
    ) -> "PeriodVocabulary":
        return cls(
            LabelRegistry.from_mapping(labels, name="periodos"),
            LabelRegistry.from_mapping(steps, name="unidades_calendario"),
        )

    def calendar_step(self, period_id: str) -> str:
        """Id de la API ("monthly") -> unidad de calendario ("months")."""
        try:
            return self.steps.resolve_id(period_id)
        except UnknownLabelError:
            raise UnknownIdentifierError(
                f"Periodo desconocido: {period_id!r}",
                registry=self.steps.name,
                key=period_id
            ) from None

    def has_period(self, period_id: str) -> bool:
        return self.labels.has_id(period_id)

    def step(self, base: FechaLike, period_id: str, n: int = 1) -> pd.Timestamp:
        """
        Avanza una fecha n pasos de la granularidad indicada.

        Si la fecha base es el ultimo dia de su mes y la unidad es mensual o
        mayor, el resultado tambien cae a fin de mes:
        2016-12-31 + 2 meses = 2017-02-28, + 3 meses = 2017-03-31.
        """
        unidad = self.calendar_step(period_id)
        argumento, multiplicador = UNIDADES_SOPORTADAS[unidad]

        base_ts = pd.Timestamp(base)
        resultado = base_ts.to_pydatetime() + relativedelta(**{argumento: n * multiplicador})

        if unidad in _UNIDADES_MENSUALES and base_ts.is_month_end:
            resultado = resultado + relativedelta(day=31)

        return pd.Timestamp(resultado)

    def pandas_offset(self, period_id: str) -> pd.DateOffset:
        """Offset de fin de periodo para colapsar observaciones a esta granularidad."""
        return _OFFSETS_PANDAS[self.calendar_step(period_id)]()

    def display_label(self, period_id: str) -> str:
        return self.labels.resolve_label(period_id)

    def as_options(self):
        return self.labels.as_options()

    def __repr__(self) -> str:
        return f"PeriodVocabulary(periodos={self.labels.ids()})"
