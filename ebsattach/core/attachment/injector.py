"""
Inyección del adjunto en el documento de estado.

show() no necesita estado; inject() localiza el módulo y modifica el documento
en memoria. Quién escribe el resultado (la CLI) lo hace solo si inject() termina.
"""

from typing import Any, Dict

from ebsattach.core.attachment.synthesizer import ATTACHMENT_TYPE, synthesize
from ebsattach.core.state.locator import Location, locate, resource_key
from ebsattach.core.state.models import StateDocument, to_data


def attachment_key(attachment_name: str) -> str:
    return resource_key(ATTACHMENT_TYPE, attachment_name)


def show(
    instance_id: str,
    volume_name: str,
    volume_id: str,
    attachment_name: str,
    device_name: str,
) -> Dict[str, Any]:
    """Devuelve {"aws_volume_attachment.<nombre>": recurso} a partir de ids ya conocidos."""
    record = synthesize(instance_id, volume_name, volume_id, device_name)
    return {attachment_key(attachment_name): to_data(record)}


def inject(
    document: StateDocument,
    instance_name: str,
    volume_name: str,
    attachment_name: str,
    device_name: str,
) -> Location:
    """
    Añade el aws_volume_attachment al módulo que contiene la instancia y el volumen.

    Modifica el documento en sitio. Si ya existe un recurso con la misma clave,
    se reemplaza. Si locate() falla, el documento queda intacto.

    Returns:
        Location usada para la inserción
    """
    location = locate(document, instance_name, volume_name)
    record = synthesize(location.instance_id, volume_name, location.volume_id, device_name)
    document.modules[location.module_index].resources[attachment_key(attachment_name)] = record
    return location
