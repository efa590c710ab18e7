"""
Estado de Seleccion del usuario.

Cada cambio en un control de la UI produce un SelectionState nuevo; nunca
se modifica uno existente.
"""
import hashlib
import json
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Optional

import pandas as pd

from forecast_dashboard.registry.catalog import Catalog
from forecast_dashboard.utils.constants import (
    CONFIANZA_DEFAULT,
    HORIZONTE_MAX,
    HORIZONTE_MIN,
    MODELO_DEFAULT,
)
from forecast_dashboard.utils.exceptions import SelectionValidationError


def _parsear_fecha(valor: Any, campo: str) -> date:
    if valor is None or valor == "":
        raise SelectionValidationError(f"Falta la fecha '{campo}'", field=campo)
    try:
        return pd.Timestamp(valor).date()
    except (ValueError, TypeError) as e:
        raise SelectionValidationError(f"Fecha invalida en '{campo}'", field=campo, value=valor) from e


def _parsear_horizonte(valor: Any) -> int:
    try:
        numero = float(valor)
    except (ValueError, TypeError) as e:
        raise SelectionValidationError("El horizonte debe ser un entero", field="horizon", value=valor) from e
    if not numero.is_integer():
        raise SelectionValidationError("El horizonte debe ser un entero", field="horizon", value=valor)
    horizonte = int(numero)
    if not HORIZONTE_MIN <= horizonte <= HORIZONTE_MAX:
        raise SelectionValidationError(
            f"El horizonte debe estar entre {HORIZONTE_MIN} y {HORIZONTE_MAX}",
            field="horizon",
            value=valor
        )
    return horizonte


def _parsear_nivel(valor: Any) -> float:
    if valor is None:
        return CONFIANZA_DEFAULT
    try:
        nivel = float(valor)
    except (ValueError, TypeError) as e:
        raise SelectionValidationError("El nivel de confianza debe ser numerico", field="level", value=valor) from e
    if not 0 < nivel < 1:
        raise SelectionValidationError("Nivel de confianza fuera de (0, 1)", field="level", value=valor)
    return nivel


@dataclass(frozen=True)
class SelectionState:
    """Seleccion completa de una sesion: serie, granularidad, rango, horizonte y modelo"""
    source_id: str
    period_id: str
    range_start: date
    range_end: date
    horizon: int
    model: str = MODELO_DEFAULT
    level: float = CONFIANZA_DEFAULT

    @classmethod
    def desde_inputs(
        cls,
        source_id: Optional[str],
        period_id: Optional[str],
        range_start: Any,
        range_end: Any,
        horizon: Any,
        catalog: Catalog,
        model: Optional[str] = None,
        level: Optional[float] = None,
        modelos_validos=None
    ) -> "SelectionState":
        """
        Construye la seleccion desde los valores crudos de los controles Dash.

        Raises:
            SelectionValidationError: con el campo invalido en `field`
        """
        if not source_id or not catalog.series.has_id(source_id):
            raise SelectionValidationError("Serie desconocida", field="source_id", value=source_id)
        if not period_id or not catalog.periods.has_period(period_id):
            raise SelectionValidationError("Granularidad desconocida", field="period_id", value=period_id)

        inicio = _parsear_fecha(range_start, "range_start")
        fin = _parsear_fecha(range_end, "range_end")
        if inicio >= fin:
            raise SelectionValidationError(
                "La fecha de inicio debe ser anterior a la fecha de fin",
                field="range_start",
                value=f"{inicio} >= {fin}"
            )

        modelo = model or MODELO_DEFAULT
        if modelos_validos is not None and modelo not in modelos_validos:
            raise SelectionValidationError("Modelo desconocido", field="model", value=modelo)

        nivel = _parsear_nivel(level)

        return cls(
            source_id=source_id,
            period_id=period_id,
            range_start=inicio,
            range_end=fin,
            horizon=_parsear_horizonte(horizon),
            model=modelo,
            level=nivel,
        )

    def to_dict(self) -> Dict[str, Any]:
        datos = asdict(self)
        datos['range_start'] = self.range_start.isoformat()
        datos['range_end'] = self.range_end.isoformat()
        return datos

    def clave(self, *campos: str) -> str:
        """
        Hash de contenido de los campos indicados (todos si no se indica ninguno).

        Dos selecciones con los mismos valores en esos campos comparten clave.
        """
        datos = self.to_dict()
        if campos:
            datos = {c: datos[c] for c in campos}
        canonico = json.dumps(datos, sort_keys=True, default=str)
        return hashlib.sha256(canonico.encode('utf-8')).hexdigest()
