"""
Attachment: id "vai-", síntesis del recurso e inyección en el estado.
"""

from ebsattach.core.attachment.hashcode import hashcode
from ebsattach.core.attachment.synthesizer import (
    ATTACHMENT_TYPE,
    synthesize,
    volume_attachment_id,
)
from ebsattach.core.attachment.injector import attachment_key, inject, show

__all__ = [
    "hashcode",
    "ATTACHMENT_TYPE",
    "synthesize",
    "volume_attachment_id",
    "attachment_key",
    "inject",
    "show",
]
