"""
Excepciones Personalizadas para Forecast Dashboard
Define excepciones especificas para distinguir errores de configuracion
(fatales al arranque) de errores recuperables en tiempo de ejecucion.
"""


class ForecastDashboardError(Exception):
    """
    Excepcion base para la aplicacion.
    Todas las excepciones personalizadas heredan de esta.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Detalles: {self.details}"
        return self.message


# ============================================================================
# Excepciones de Configuracion (fatales al arranque)
# ============================================================================

class ConfigurationError(ForecastDashboardError):
    """Error en la configuracion del sistema"""
    pass


class RegistryIntegrityError(ConfigurationError):
    """Tabla de etiquetas rota: etiquetas o identificadores duplicados"""

    def __init__(self, message: str, registry: str = None, duplicates: list = None):
        details = {}
        if registry:
            details['registry'] = registry
        if duplicates:
            details['duplicates'] = list(duplicates)
        super().__init__(message, details)


# ============================================================================
# Excepciones de Busqueda en Registros
# ============================================================================

class RegistryLookupError(ForecastDashboardError):
    """Excepcion base para busquedas fallidas en un registro de etiquetas"""

    def __init__(self, message: str, registry: str = None, key: str = None):
        details = {}
        if registry:
            details['registry'] = registry
        if key is not None:
            details['key'] = str(key)[:100]
        self.key = key
        super().__init__(message, details)


class UnknownLabelError(RegistryLookupError):
    """La etiqueta visible no existe en el registro"""
    pass


class UnknownIdentifierError(RegistryLookupError):
    """El identificador externo no existe en el registro"""
    pass


# ============================================================================
# Excepciones de Validacion
# ============================================================================

class ValidationError(ForecastDashboardError):
    """Excepcion base para errores de validacion"""
    pass


class SelectionValidationError(ValidationError):
    """Seleccion del usuario invalida (fechas, horizonte, ids)"""

    def __init__(self, message: str, field: str = None, value=None):
        details = {}
        if field:
            details['field'] = field
        if value is not None:
            details['value'] = str(value)[:100]
        self.field = field
        super().__init__(message, details)


# ============================================================================
# Excepciones de Conexion Externa
# ============================================================================

class ExternalConnectionError(ForecastDashboardError):
    """Excepcion base para errores de conexion externa"""
    pass


class FetchFailedError(ExternalConnectionError):
    """La API de datos no devolvio una serie utilizable (red, auth, sin datos)"""

    def __init__(self, reason: str, source_id: str = None, status_code: int = None):
        details = {}
        if source_id:
            details['source_id'] = source_id
        if status_code:
            details['status_code'] = status_code
        self.reason = reason
        self.source_id = source_id
        self.status_code = status_code
        super().__init__(reason, details)


# ============================================================================
# Excepciones de ML/Prediccion
# ============================================================================

class MLError(ForecastDashboardError):
    """Excepcion base para errores de Machine Learning"""
    pass


class ForecastFailedError(MLError):
    """El modelo no pudo generar el pronostico"""

    def __init__(self, message: str, model_type: str = None, samples: int = None):
        details = {}
        if model_type:
            details['model_type'] = model_type
        if samples is not None:
            details['samples'] = samples
        super().__init__(message, details)


class InsufficientDataError(ForecastFailedError):
    """No hay suficientes datos para ajustar el modelo"""

    def __init__(self, message: str, required: int = None, available: int = None,
                 model_type: str = None):
        super().__init__(message, model_type=model_type, samples=available)
        if required:
            self.details['required'] = required
        self.required = required
        self.available = available


# ============================================================================
# Excepciones de Procesamiento
# ============================================================================

class ProcessingError(ForecastDashboardError):
    """Excepcion base para errores de procesamiento"""
    pass


class MergeIntegrityError(ProcessingError):
    """Fechas historicas y futuras se solapan al combinar series"""

    def __init__(self, message: str, overlapping: int = None):
        details = {}
        if overlapping:
            details['overlapping'] = overlapping
        super().__init__(message, details)
