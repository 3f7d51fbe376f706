"""
Síntesis del recurso aws_volume_attachment.

Funciones puras: mismas entradas, mismo registro (sin aleatoriedad ni fechas).
"""

from ebsattach.core.attachment.hashcode import hashcode
from ebsattach.core.state.locator import VOLUME_TYPE, resource_key
from ebsattach.core.state.models import InstanceState, ResourceState

ATTACHMENT_TYPE = "aws_volume_attachment"


def volume_attachment_id(device_name: str, instance_id: str, volume_id: str) -> str:
    """
    Calcula el id "vai-<hash>" igual que el provider AWS de Terraform.

    La clave es "<device>-<instance_id>-<volume_id>-", en ese orden.
    """
    raw = f"{device_name}-{instance_id}-{volume_id}-"
    return f"vai-{hashcode(raw)}"


def synthesize(instance_id: str, volume_name: str, volume_id: str, device_name: str) -> ResourceState:
    """
    Construye el ResourceState del adjunto volumen-instancia.

    Args:
        instance_id: Id EC2 de la instancia (i-...)
        volume_name: Nombre del recurso aws_ebs_volume (para depends_on)
        volume_id: Id EBS del volumen (vol-...)
        device_name: Valor de device_name del aws_volume_attachment (/dev/sdg)

    Returns:
        ResourceState listo para insertar en module.resources
    """
    attachment_id = volume_attachment_id(device_name, instance_id, volume_id)
    return ResourceState(
        type=ATTACHMENT_TYPE,
        depends_on=[resource_key(VOLUME_TYPE, volume_name)],
        primary=InstanceState(
            id=attachment_id,
            attributes={
                "id": attachment_id,
                "device_name": device_name,
                "instance_id": instance_id,
                "volume_id": volume_id,
            },
            meta={},
            tainted=False,
        ),
        deposed=[],
        provider="",
    )
