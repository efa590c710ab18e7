"""
Sesiones del tablero.

Cada sesion de navegador tiene su propio pipeline y su propio estado
confirmado. Los recalculos se versionan: si llega una seleccion nueva
mientras otra se calcula, solo la mas reciente puede confirmarse
(last-write-wins por version, no por orden de llegada).
"""
import threading
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from loguru import logger

from forecast_dashboard.services.pipeline import ForecastPipeline, PipelineState
from forecast_dashboard.services.selection import SelectionState
from forecast_dashboard.utils.constants import MAX_SESIONES


class DashboardSession:
    """
    Estado de una sesion: version enviada mas reciente y ultimo estado confirmado.

    `estado_actual` siempre es un PipelineState completo; nunca se expone un
    recalculo a medias.
    """

    def __init__(self, session_id: str, pipeline: ForecastPipeline):
        self.session_id = session_id
        self.pipeline = pipeline
        self._lock = threading.Lock()
        self._ultima_version = 0
        self._estado: Optional[PipelineState] = None

    @property
    def estado_actual(self) -> Optional[PipelineState]:
        with self._lock:
            return self._estado

    @property
    def ultima_version(self) -> int:
        with self._lock:
            return self._ultima_version

    def reservar_version(self) -> int:
        """Registra un envio nuevo; invalida cualquier recalculo en curso."""
        with self._lock:
            self._ultima_version += 1
            return self._ultima_version

    def confirmar(self, estado: PipelineState) -> bool:
        """Confirma el estado solo si su version sigue siendo la mas reciente."""
        with self._lock:
            if estado.version != self._ultima_version:
                logger.info(
                    f"Sesion {self.session_id[:8]}: descartado v{estado.version} "
                    f"(vigente v{self._ultima_version})"
                )
                return False
            self._estado = estado
            return True

    def enviar(self, selection: SelectionState) -> Optional[PipelineState]:
        """
        Recalcula para la seleccion y confirma el resultado.

        El calculo corre fuera del lock, de modo que otra seleccion puede
        enviarse mientras tanto.

        Returns:
            El estado confirmado, o None si quedo obsoleto antes de terminar
        """
        version = self.reservar_version()
        estado = self.pipeline.recalcular(selection, version)
        return estado if self.confirmar(estado) else None


class SessionStore:
    """
    Mapa thread-safe session_id -> DashboardSession con desalojo LRU.

    Args:
        pipeline_factory: crea un pipeline nuevo (y aislado) por sesion
        max_sesiones: sesiones vivas como maximo
    """

    def __init__(self, pipeline_factory: Callable[[], ForecastPipeline], max_sesiones: int = MAX_SESIONES):
        self.pipeline_factory = pipeline_factory
        self.max_sesiones = max_sesiones
        self._sesiones: "OrderedDict[str, DashboardSession]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def nuevo_id() -> str:
        return uuid.uuid4().hex

    def obtener(self, session_id: Optional[str]) -> DashboardSession:
        """Devuelve la sesion existente o crea una nueva."""
        session_id = session_id or self.nuevo_id()
        with self._lock:
            sesion = self._sesiones.get(session_id)
            if sesion is None:
                sesion = DashboardSession(session_id, self.pipeline_factory())
                self._sesiones[session_id] = sesion
                logger.debug(f"Sesion creada: {session_id[:8]}")
            self._sesiones.move_to_end(session_id)
            while len(self._sesiones) > self.max_sesiones:
                desalojada, _ = self._sesiones.popitem(last=False)
                logger.debug(f"Sesion desalojada: {desalojada[:8]}")
            return sesion

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sesiones

    def __len__(self) -> int:
        with self._lock:
            return len(self._sesiones)
