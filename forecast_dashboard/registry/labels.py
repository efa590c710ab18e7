"""
Registro Bidireccional de Etiquetas
===================================
Traduce etiquetas visibles en la UI a identificadores de un vocabulario
externo (API de datos, unidades de calendario) y viceversa.

La tabla se construye una sola vez al arranque y es inmutable. Como ambas
busquedas asumen una biyeccion, cualquier etiqueta o identificador repetido
se rechaza al construir el registro.
"""
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from forecast_dashboard.utils.exceptions import (
    RegistryIntegrityError,
    UnknownIdentifierError,
    UnknownLabelError,
)


@dataclass(frozen=True)
class LabelEntry:
    """Par etiqueta visible / identificador externo"""
    display_label: str
    external_id: str


def _duplicados(valores: Iterable[str]) -> List[str]:
    return [valor for valor, n in Counter(valores).items() if n > 1]


class LabelRegistry:
    """
    Registro inmutable y ordenado de LabelEntry con busqueda en ambos sentidos.

    Ejemplo de uso:
        series = LabelRegistry.from_mapping({"WTI oil": "FRED/DCOILWTICO"}, name="series")
        series.resolve_id("WTI oil")            # "FRED/DCOILWTICO"
        series.resolve_label("FRED/DCOILWTICO")  # "WTI oil"
    """

    def __init__(self, entries: Iterable[LabelEntry], name: str = "labels"):
        self.name = name
        self._entries: Tuple[LabelEntry, ...] = tuple(entries)

        vacios = [e for e in self._entries if not e.display_label or not e.external_id]
        if vacios:
            raise RegistryIntegrityError(
                f"Registro '{name}' contiene etiquetas o identificadores vacios",
                registry=name,
                duplicates=[f"{e.display_label!r}->{e.external_id!r}" for e in vacios]
            )

        labels_dup = _duplicados(e.display_label for e in self._entries)
        if labels_dup:
            raise RegistryIntegrityError(
                f"Registro '{name}' tiene etiquetas duplicadas: {labels_dup}",
                registry=name,
                duplicates=labels_dup
            )

        ids_dup = _duplicados(e.external_id for e in self._entries)
        if ids_dup:
            raise RegistryIntegrityError(
                f"Registro '{name}' tiene identificadores duplicados: {ids_dup}",
                registry=name,
                duplicates=ids_dup
            )

        self._por_label: Mapping[str, str] = MappingProxyType(
            {e.display_label: e.external_id for e in self._entries}
        )
        self._por_id: Mapping[str, str] = MappingProxyType(
            {e.external_id: e.display_label for e in self._entries}
        )

    @classmethod
    def from_mapping(cls, mapping: Dict[str, str], name: str = "labels") -> "LabelRegistry":
        """Construye el registro desde un dict {etiqueta: identificador}."""
        return cls((LabelEntry(label, ext_id) for label, ext_id in mapping.items()), name=name)

    def resolve_id(self, display_label: str) -> str:
        """Etiqueta visible -> identificador externo."""
        try:
            return self._por_label[display_label]
        except (KeyError, TypeError):
            raise UnknownLabelError(
                f"Etiqueta desconocida en '{self.name}': {display_label!r}",
                registry=self.name,
                key=display_label
            ) from None

    def resolve_label(self, external_id: str) -> str:
        """Identificador externo -> etiqueta visible."""
        try:
            return self._por_id[external_id]
        except (KeyError, TypeError):
            raise UnknownIdentifierError(
                f"Identificador desconocido en '{self.name}': {external_id!r}",
                registry=self.name,
                key=external_id
            ) from None

    def has_id(self, external_id: str) -> bool:
        return external_id in self._por_id

    @property
    def entries(self) -> Tuple[LabelEntry, ...]:
        return self._entries

    def labels(self) -> List[str]:
        return [e.display_label for e in self._entries]

    def ids(self) -> List[str]:
        return [e.external_id for e in self._entries]

    def as_options(self) -> List[Dict[str, str]]:
        """Opciones para dcc.Dropdown: la UI muestra la etiqueta y envia el id."""
        return [{"label": e.display_label, "value": e.external_id} for e in self._entries]

    def __contains__(self, display_label: object) -> bool:
        return display_label in self._por_label

    def __iter__(self) -> Iterator[LabelEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LabelRegistry(name={self.name!r}, entries={len(self._entries)})"
