"""
Core: lógica pura de tf-ebs-attach.

- state: modelos del documento de estado y localización de recursos.
- attachment: cálculo del id "vai-" y síntesis/inyección del recurso.
- diff: diff estructural entre el estado original y el modificado.
- runtime: configuración y lectura/escritura del documento.

La CLI importa desde core; nunca al revés.
"""

from ebsattach.core.errors import (
    AttachError,
    ConfigError,
    OutputWriteError,
    ResourceNotFoundError,
    StateParseError,
    StateStructureError,
)

__all__ = [
    "AttachError",
    "ConfigError",
    "OutputWriteError",
    "ResourceNotFoundError",
    "StateParseError",
    "StateStructureError",
]
