"""
Localización de la instancia y el volumen dentro del estado.

Recorre los módulos en orden y devuelve el primero que contiene ambos recursos.
Si un módulo posterior también los contiene, se ignora: el primero gana.
"""

from typing import NamedTuple

from ebsattach.core.errors import ResourceNotFoundError, StateStructureError
from ebsattach.core.state.models import ResourceState, StateDocument

INSTANCE_TYPE = "aws_instance"
VOLUME_TYPE = "aws_ebs_volume"


class Location(NamedTuple):
    """Resultado de locate(): índice del módulo e ids reales de ambos recursos."""
    module_index: int
    instance_id: str
    volume_id: str


def resource_key(resource_type: str, name: str) -> str:
    """Clave de un recurso dentro de module.resources ("<tipo>.<nombre>")."""
    return f"{resource_type}.{name}"


def _primary_id(resource: ResourceState, key: str, module_index: int) -> str:
    if resource.primary is None:
        raise StateStructureError(
            f'El recurso "{key}" del módulo {module_index} no tiene registro primario'
        )
    return resource.primary.id


def locate(document: StateDocument, instance_name: str, volume_name: str) -> Location:
    """
    Busca el primer módulo que contiene aws_instance.<instance_name> y
    aws_ebs_volume.<volume_name>.

    Args:
        document: Documento de estado ya parseado
        instance_name: Nombre del recurso aws_instance en el código Terraform
        volume_name: Nombre del recurso aws_ebs_volume en el código Terraform

    Returns:
        Location con el índice del módulo y los ids primarios

    Raises:
        ResourceNotFoundError: si ningún módulo contiene ambos recursos
    """
    instance_key = resource_key(INSTANCE_TYPE, instance_name)
    volume_key = resource_key(VOLUME_TYPE, volume_name)

    for index, module in enumerate(document.modules):
        instance = module.resources.get(instance_key)
        if instance is None:
            continue
        volume = module.resources.get(volume_key)
        if volume is not None:
            return Location(
                module_index=index,
                instance_id=_primary_id(instance, instance_key, index),
                volume_id=_primary_id(volume, volume_key, index),
            )

    raise ResourceNotFoundError(instance_key, volume_key)
