"""
Errores de tf-ebs-attach.

El core solo define excepciones; la CLI se encarga del formato de salida.
"""

from typing import Optional


class AttachError(Exception):
    """Error base de tf-ebs-attach."""
    pass


class ConfigError(AttachError):
    """Error de configuración (archivo ilegible, valor inválido)."""
    pass


class StateParseError(AttachError):
    """El documento de estado no se pudo leer o no es JSON válido."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Error al leer el estado desde {source}: {reason}")


class StateStructureError(AttachError):
    """El documento no tiene la forma esperada (modules / resources / primary)."""
    pass


class ResourceNotFoundError(AttachError):
    """Ningún módulo contiene a la vez la instancia y el volumen."""

    def __init__(self, instance_key: str, volume_key: str):
        self.instance_key = instance_key
        self.volume_key = volume_key
        super().__init__(
            f'No se encontró un módulo en el estado que contenga ("{instance_key}", "{volume_key}")'
        )


class OutputWriteError(AttachError):
    """No se pudo escribir el destino."""

    def __init__(self, destination: str, reason: Optional[str] = None):
        self.destination = destination
        self.reason = reason
        message = f"Error al escribir {destination}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
